from .reader import CsvParseError, EmptyFileError, ParsedCsv, parse_csv, parse_row

__all__ = [
    "CsvParseError",
    "EmptyFileError",
    "ParsedCsv",
    "parse_csv",
    "parse_row",
]
