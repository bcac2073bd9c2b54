"""Core limits for termtext.

Single source of truth for size limits. Results and report lengths are capped
at the largest signed 32-bit integer so that output stays portable to
consumers with fixed-width string lengths.
"""

MAX_INT = 2**31 - 1

# Longest string (in characters) any operation will produce.
MAX_STRING_LENGTH = MAX_INT

# Characters that end a sentence, and closers that may follow them.
SENTENCE_END = frozenset(".!?")
SENTENCE_CLOSERS = frozenset("\"')")
