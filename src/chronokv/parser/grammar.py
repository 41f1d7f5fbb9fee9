"""
chronokv Grammar - Lark EBNF grammar for the chronokv command language.

This grammar defines one command per string:
- SET / DELETE / GET on a single (key, field), optionally AT a timestamp
- TTL on SET for values that expire
- SCAN of a key, optionally restricted by a field-name PREFIX
- HISTORY of a single field's timeline

Commands without AT operate on the current time of the store.
"""

COMMAND_GRAMMAR = r'''
start: command

command: set_cmd
       | delete_cmd
       | get_cmd
       | scan_cmd
       | history_cmd

// Writes
set_cmd: _SET ident ident value at_clause? ttl_clause?
delete_cmd: _DELETE ident ident at_clause?

// Reads
get_cmd: _GET ident ident at_clause?
scan_cmd: _SCAN ident prefix_clause? at_clause?
history_cmd: _HISTORY ident ident

// Clauses
at_clause: _AT (INT | VARIABLE)
ttl_clause: _TTL (INT | VARIABLE)
prefix_clause: _PREFIX ident

// Operands
// Bare names that spell a keyword lex as that keyword, so the keywords are
// valid operands too. Commands have fixed arity, which keeps them apart
// from clauses.
ident: NAME | STRING | INT | VARIABLE | keyword
value: NAME | STRING | INT | VARIABLE | keyword
!keyword: _SET | _DELETE | _GET | _SCAN | _HISTORY | _AT | _TTL | _PREFIX

// Keywords
_SET: "SET"i
_DELETE: "DELETE"i
_GET: "GET"i
_SCAN: "SCAN"i
_HISTORY: "HISTORY"i
_AT: "AT"i
_TTL: "TTL"i
_PREFIX: "PREFIX"i

// Terminals
NAME: /[a-zA-Z_][a-zA-Z0-9_.:@\/+-]*/
VARIABLE: "$" /[a-zA-Z_][a-zA-Z0-9_]*/
INT: /-?[0-9]+/
STRING: /"[^"]*"/ | /'[^']*'/

// Whitespace and comments
%import common.WS
%ignore WS
COMMENT: /--[^\n]*/
%ignore COMMENT
'''


def get_grammar() -> str:
    """Return the command grammar string for use with Lark."""
    return COMMAND_GRAMMAR
