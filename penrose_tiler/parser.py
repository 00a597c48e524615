import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .history import PlacementRecord, check_record
from .lexer import Token, tokenize_line
from .prototiles import NUM_SIDES, PrototileType

_ERROR_LOC_RE = re.compile(r"\[line (\d+), col (\d+)\]")


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self):
        return self.toks[self.i] if self.i < len(self.toks) else None

    def expect(self, *types: str):
        t = self.peek()
        if t and t[0] in types:
            self.i += 1
            return t
        want = '|'.join(types)
        if t:
            raise SyntaxError(f'[line {t[2]}, col {t[3]}] expected {want}, got {t[0]}')
        raise SyntaxError(f'Unexpected end of line: expected {want}')

    def consume_keyword(self, keyword: str):
        tok = self.expect('ID')
        if tok[1].lower() != keyword:
            raise SyntaxError(f"[line {tok[2]}, col {tok[3]}] expected keyword '{keyword}', got '{tok[1]}'")
        return tok

    def expect_end(self):
        t = self.peek()
        if t:
            raise SyntaxError(f"[line {t[2]}, col {t[3]}] unexpected trailing token '{t[1]}'")


def parse_type(cur: Cursor) -> PrototileType:
    tok = cur.expect('ID')
    try:
        return PrototileType.from_name(tok[1])
    except ValueError:
        raise SyntaxError(
            f"[line {tok[2]}, col {tok[3]}] unknown tile type '{tok[1]}' (expected fat|skinny)"
        ) from None


def parse_side(cur: Cursor) -> int:
    tok = cur.expect('INT')
    side = int(tok[1])
    if side >= NUM_SIDES:
        raise SyntaxError(f'[line {tok[2]}, col {tok[3]}] side must be 0..{NUM_SIDES - 1}, got {side}')
    return side


def parse_record(tokens: List[Token]) -> PlacementRecord:
    cur = Cursor(tokens)
    head = cur.expect('ID')
    kw = head[1].lower()
    if kw == 'root':
        record = PlacementRecord.root(parse_type(cur))
    elif kw == 'on':
        anchor = int(cur.expect('INT')[1])
        cur.consume_keyword('side')
        side = parse_side(cur)
        record = PlacementRecord.attached(anchor, side, parse_type(cur))
    else:
        raise SyntaxError(f"[line {head[2]}, col {head[3]}] unknown record '{head[1]}' (expected root|on)")
    cur.expect_end()
    return record


def _augment_syntax_error(err: SyntaxError, line_text: str) -> Optional[SyntaxError]:
    message = str(err)
    if not line_text or "\n" in message:
        return None
    match = _ERROR_LOC_RE.search(message)
    if not match:
        return None
    col = max(int(match.group(2)), 1)
    caret_line = " " * (col - 1) + "^"
    snippet = f"    {line_text.rstrip()}\n    {caret_line}"
    return SyntaxError(f"{message}\n{snippet}")


def parse_history(text: str) -> List[PlacementRecord]:
    """Parse the text log format into placement records, checking handle order."""

    records: List[PlacementRecord] = []
    for i, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens = tokenize_line(raw, i)
            if not tokens:
                continue
            record = parse_record(tokens)
        except SyntaxError as err:
            augmented = _augment_syntax_error(err, raw)
            if augmented is None:
                raise
            raise augmented from None
        check_record(record, len(records), line=i)
        records.append(record)
    return records


def read_history(path: Union[str, Path]) -> List[PlacementRecord]:
    return parse_history(Path(path).read_text(encoding="utf-8"))
