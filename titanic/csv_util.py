"""Reading and writing passenger CSV files."""

import logging

import pandas as pd

from titanic_errors import SourceReadError, SourceWriteError

logger = logging.getLogger(__name__)


class CsvUtil:
    """CSV reader/writer configured once with the file format.

    Args:
        delimiter: Field delimiter (default: ',')
        has_headers: Whether files start with a header row (default: True)
    """

    def __init__(self, delimiter=",", has_headers=True):
        self.delimiter = delimiter
        self.has_headers = has_headers

    def read_file(self, path):
        """Read every data row of a CSV file as a list of strings.

        Cells are kept as raw text: empty cells are read as "" rather than
        NaN, so parsing them is left to the record schema.

        Args:
            path: Path to the CSV file

        Returns:
            List of rows, each a list of strings

        Raises:
            SourceReadError: If the file can't be opened or parsed
        """
        try:
            frame = pd.read_csv(
                path,
                sep=self.delimiter,
                header=0 if self.has_headers else None,
                dtype=str,
                keep_default_na=False,
            )
        except (OSError, UnicodeDecodeError, ValueError, pd.errors.ParserError) as e:
            raise SourceReadError(path, e) from e

        # Short rows are padded with NaN regardless of keep_default_na
        rows = frame.fillna("").values.tolist()
        logger.info("Read %d rows from %s", len(rows), path)
        return rows

    def write_file(self, path, headers, rows):
        """Write rows to a CSV file.

        Args:
            path: Output path
            headers: Column names, written first when has_headers is set
            rows: Iterable of row sequences; missing values are written as NaN

        Returns:
            Number of lines written, header included

        Raises:
            SourceWriteError: If the file can't be written
        """
        frame = pd.DataFrame(list(rows), columns=headers)
        try:
            frame.to_csv(path, sep=self.delimiter, header=self.has_headers, index=False, na_rep="NaN")
        except OSError as e:
            raise SourceWriteError(path, e) from e

        num_lines = len(frame) + (1 if self.has_headers else 0)
        logger.info("Wrote %d lines to %s", num_lines, path)
        return num_lines
