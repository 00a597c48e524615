import re
from typing import List, Tuple

Token = Tuple[str, str, int, int]  # (type, value, line, col)

WS = ' \t\r'

_id_re = re.compile(r'[A-Za-z][A-Za-z_]*')
_int_re = re.compile(r'\d+')

def tokenize_line(s: str, line_no: int) -> List[Token]:
    tokens: List[Token] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        col = i + 1
        if ch == '#':
            break
        if ch in WS:
            i += 1
            continue
        m = _int_re.match(s, i)
        if m:
            tokens.append(('INT', m.group(0), line_no, col))
            i = m.end()
            continue
        m = _id_re.match(s, i)
        if m:
            tokens.append(('ID', m.group(0), line_no, col))
            i = m.end()
            continue
        raise SyntaxError(f'[line {line_no}, col {col}] unexpected character: {ch!r}')
    return tokens
