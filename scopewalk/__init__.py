"""scopewalk — scoped, line-mapped text blocks from rendered markup."""

__version__ = "0.1.0"
