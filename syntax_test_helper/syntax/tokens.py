#!/usr/bin/env python3
"""
Token and trivia kind tables.

Keywords and punctuators carry a fixed spelling, so serialized trees only
name their kind. Every other token kind has to carry its text explicitly.
"""

from typing import Dict, Optional


# Declaration, statement and expression keywords, spelled as in source
KEYWORDS = [
    "associatedtype", "class", "deinit", "enum", "extension", "func", "import",
    "init", "inout", "let", "operator", "precedencegroup", "protocol", "struct",
    "subscript", "typealias", "var", "fileprivate", "internal", "private",
    "public", "static", "defer", "if", "guard", "do", "repeat", "else", "for",
    "in", "while", "return", "break", "continue", "fallthrough", "switch",
    "case", "default", "where", "catch", "throw", "as", "Any", "false", "is",
    "nil", "rethrows", "super", "self", "Self", "true", "try", "throws",
    "__FILE__", "__LINE__", "__COLUMN__", "__FUNCTION__", "__DSO_HANDLE__", "_",
]

# '#'-prefixed keywords; the token kind is pound_<name>
POUND_KEYWORDS = [
    "keyPath", "line", "selector", "file", "column", "function", "dsohandle",
    "assert", "sourceLocation", "warning", "error", "if", "else", "elseif",
    "endif", "available", "fileLiteral", "imageLiteral", "colorLiteral",
]

PUNCTUATORS: Dict[str, str] = {
    "l_paren": "(",
    "r_paren": ")",
    "l_brace": "{",
    "r_brace": "}",
    "l_square": "[",
    "r_square": "]",
    "l_angle": "<",
    "r_angle": ">",
    "period": ".",
    "period_prefix": ".",
    "comma": ",",
    "colon": ":",
    "semi": ";",
    "equal": "=",
    "at_sign": "@",
    "pound": "#",
    "amp_prefix": "&",
    "arrow": "->",
    "backtick": "`",
    "backslash": "\\",
    "exclaim_postfix": "!",
    "question_postfix": "?",
    "question_infix": "?",
    "string_quote": "\"",
    "multiline_string_quote": "\"\"\"",
    "string_interpolation_anchor": ")",
    "eof": "",
}

# Kinds whose spelling varies and therefore must be serialized with the token
TEXT_TOKEN_KINDS = {
    "identifier",
    "dollarident",
    "contextual_keyword",
    "integer_literal",
    "floating_literal",
    "string_literal",
    "string_segment",
    "unspaced_binary_operator",
    "spaced_binary_operator",
    "prefix_operator",
    "postfix_operator",
    "unknown",
}


def _build_fixed_spellings() -> Dict[str, str]:
    spellings = dict(PUNCTUATORS)
    for keyword in KEYWORDS:
        spellings["kw_" + keyword] = keyword
    for keyword in POUND_KEYWORDS:
        spellings["pound_" + keyword] = "#" + keyword
    return spellings


FIXED_SPELLINGS = _build_fixed_spellings()


def is_keyword_kind(token_kind: str) -> bool:
    return token_kind.startswith("kw_")


def is_pound_kind(token_kind: str) -> bool:
    return token_kind.startswith("pound_")


def default_text(token_kind: str) -> Optional[str]:
    """Return the fixed spelling of a token kind, or None if it has none."""
    return FIXED_SPELLINGS.get(token_kind)


def is_known_token_kind(token_kind: str) -> bool:
    return token_kind in FIXED_SPELLINGS or token_kind in TEXT_TOKEN_KINDS


# Trivia repeated `count` times: kind -> spelling of one repetition
COUNTED_TRIVIA: Dict[str, str] = {
    "Space": " ",
    "Tab": "\t",
    "VerticalTab": "\v",
    "Formfeed": "\f",
    "Newline": "\n",
    "CarriageReturn": "\r",
    "CarriageReturnLineFeed": "\r\n",
    "Backtick": "`",
}

# Trivia that carries its own text
TEXT_TRIVIA = {
    "LineComment",
    "BlockComment",
    "DocLineComment",
    "DocBlockComment",
    "GarbageText",
}
