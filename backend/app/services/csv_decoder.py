"""CSV decoding for uploaded metafield definition files."""
import csv
import io


class CsvDecodeError(ValueError):
    """Raised when uploaded bytes are not parseable as delimited text."""


def decode_csv(content: bytes) -> list[dict[str, str]]:
    """Parse CSV bytes into ordered row mappings keyed by the header line.

    Empty lines are skipped. Malformed quoting or a record whose field count
    differs from the header raises CsvDecodeError. A header-only file yields [].
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CsvDecodeError(f"File is not valid UTF-8 text ({exc.reason} at byte {exc.start})") from exc

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    header: list[str] | None = None
    rows: list[dict[str, str]] = []

    try:
        for record in reader:
            if not record:
                continue
            if header is None:
                header = record
                continue
            if len(record) != len(header):
                raise CsvDecodeError(
                    f"Line {reader.line_num}: expected {len(header)} fields, found {len(record)}"
                )
            rows.append(dict(zip(header, record)))
    except csv.Error as exc:
        raise CsvDecodeError(f"Line {reader.line_num}: {exc}") from exc

    return rows
