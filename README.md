# rsvcore

A library of building blocks for tools that process CSV, TSV and other
delimited text. It has no third-party dependencies.

## Modules

- `rsvcore.row_split.split_row(row, sep, quote)` yields the fields of one row.
  It handles quoted fields, separators inside quotes, and quotes escaped with
  `\"` or `""`. A quoted field keeps its quotes only when it holds a separator.
- `rsvcore.column.Columns` parses column selections such as `0,1,2,5`,
  `0-2,5`, `-1` or `-2--1`. To resolve negative indices it needs the column
  count, given through `total_col(n)` or read from a file's first line through
  `total_col_of(path, sep, quote)`.
- `rsvcore.filter.Filter` parses row filters joined by `&`, such as `0=a,b`,
  `1N>10`, `2!=` or `0>=@1+1`. A trailing `N` on the column compares as
  numbers. The right-hand side can be arithmetic on other columns, written
  `@N` or `cN` (see `rsvcore.math_expr.parse_expr`, which supports
  `+ - * / % ^` and parentheses).
- `rsvcore.column_type.ColumnTypes` guesses whether each column holds ints,
  floats or strings. It samples up to 5000 rows from a file
  (`guess_from_csv`) or from rows already split (`guess_from_io`).
- `rsvcore.column_stats.ColumnStats` gathers min, max, mean, unique and null
  counts for each column. Statistics from separate batches can be merged, and
  `render()` draws them as a box table.
- `rsvcore.sort.SortColumns.from_str` reads sort keys for one or two columns,
  such as `0`, `0D` (descending), `0N` (numeric) or `0DN,2N`. `sorted_lines`
  and `sorted_rows` return the sorted data. `sort_and_write` and
  `sort_rows_and_write` send it to a `Writer`.
- `rsvcore.writer.Writer` writes lines, fields or raw bytes to a file, to an
  appended file or to standard output. It can be used as a context manager.
- `rsvcore.reader.ChunkReader` reads a file line by line, or in `Task` chunks.
  `rsvcore.reader.IoReader` reads lines from standard input or from a given
  stream, optionally only the header plus the first `top_n` records.
- `rsvcore.table.Table` prints records as a borderless aligned table.
- `rsvcore.file` estimates bytes per line and counts the columns in a file's
  first line. It also writes frequency tables to CSV and recognises Excel file
  names by their extension.
- `rsvcore.to` builds output file names (a bare format such as `csv` becomes
  `export.csv` in the working directory). Its `csv_or_io_to_csv` copies a file
  or a stream to that output.
- `rsvcore.search_regex.Re` does case-insensitive regex matching.
- `rsvcore.priority_queue.PriorityQueue` keeps the items with the lowest
  priorities, up to a fixed capacity.
- `rsvcore.progress.Progress` prints a one-line progress status.
  `format_bytes` formats byte counts as KB, MB or GB.
- `rsvcore.util` holds the helpers `is_null`, `get_valid_sep`,
  `datetime_str` and `print_frequency_table`. It also has `CliError`, the
  exception raised for bad input, and the context manager `exit_on_error`,
  which reports an error on stderr and exits with status 1.

## What it does not do

- It installs no command. It is a library to build commands on.
- It does not read or write Excel workbooks. `rsvcore.file.is_excel` only
  recognises `.xlsx` and `.xls` names.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Example

```python
from rsvcore.row_split import split_row
from rsvcore.filter import Filter
from rsvcore.sort import SortColumns

rows = ["a,2", "b,10", "c,1"]

flt = Filter("1N>1").total_col(2).parse()
kept = [r for r in rows if flt.record_is_valid(list(split_row(r, ",", '"')))]
# ['a,2', 'b,10']

order = SortColumns.from_str("1ND")
print(order.sorted_lines(rows, ",", '"'))
# ['b,10', 'a,2', 'c,1']
```