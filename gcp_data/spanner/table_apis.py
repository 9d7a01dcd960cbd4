# python3
# Copyright 2019 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Table-level reads and writes on Spanner read contexts and batches.

Reads take anything with a `read` method: a snapshot or a transaction. Writes
take anything with the mutation methods: a batch, which commits on its own, or
a transaction, which buffers them until it commits.
"""

import logging
from typing import Any, Iterable, List

from google.cloud import spanner

_logger = logging.getLogger(__name__)


# Read methods
def find(read_context: Any, table_name: str, columns: Iterable[str],
         keyset: spanner.KeySet) -> List[List[Any]]:
  """Retrieves rows from the given table based on the provided KeySet.

  Args:
    read_context: The Spanner snapshot or transaction to execute the request on
    table_name: The Spanner table being queried
    columns: Which columns to retrieve from the Spanner table
    keyset: Contains a list of primary keys that indicates which rows to
      retrieve from the Spanner table

  Returns:
    A list of lists. Each sublist is the set of `columns` requested from
    a row in the Spanner table whose primary key matches one of the
    primary keys in the `keyset`. The order of the values in the sublist
    matches the order of the columns from the `columns` parameter.
  """
  _logger.debug('Find table=%s columns=%s keys=%s all=%s', table_name, columns,
                keyset.keys, keyset.all_)
  stream_results = read_context.read(
      table=table_name, columns=columns, keyset=keyset)
  return [list(row) for row in stream_results]


# Write methods
def delete(sink: Any, table_name: str, keyset: spanner.KeySet) -> None:
  """Deletes rows from the given table based on the provided KeySet.

  Args:
    sink: The Spanner batch or transaction to write to
    table_name: The Spanner table being modified
    keyset: Contains a list of primary keys that indicates which rows to delete
      from the Spanner table
  """
  _logger.debug('Delete table=%s keys=%s', table_name, keyset.keys)
  sink.delete(table=table_name, keyset=keyset)


def insert(sink: Any, table_name: str, columns: Iterable[str],
           values: Iterable[Iterable[Any]]) -> None:
  """Adds rows to the given table based on the provided values.

  If a row is specified for which the primary key already exists in the
  table, the commit fails.

  Args:
    sink: The Spanner batch or transaction to write to
    table_name: The Spanner table being modified
    columns: Which columns to write on the Spanner table
    values: A list of rows to write to the table. The order of the values in
      each sublist must match the order of the columns specified in the
      `columns` parameter.
  """
  _logger.debug('Insert table=%s columns=%s values=%s', table_name, columns,
                values)
  sink.insert(table=table_name, columns=columns, values=values)


def update(sink: Any, table_name: str, columns: Iterable[str],
           values: Iterable[Iterable[Any]]) -> None:
  """Updates rows in the given table based on the provided values.

  If a row is specified for which the primary key does not exist in the
  table, the commit fails.

  Args:
    sink: The Spanner batch or transaction to write to
    table_name: The Spanner table being modified
    columns: Which columns to write on the Spanner table
    values: A list of rows to write to the table, in `columns` order.
  """
  _logger.debug('Update table=%s columns=%s values=%s', table_name, columns,
                values)
  sink.update(table=table_name, columns=columns, values=values)


def upsert(sink: Any, table_name: str, columns: Iterable[str],
           values: Iterable[Iterable[Any]]) -> None:
  """Inserts or updates rows in the given table based on the provided values.

  The presence or absence of data in the table will not cause the commit to
  fail, unlike insert or update.

  Args:
    sink: The Spanner batch or transaction to write to
    table_name: The Spanner table being modified
    columns: Which columns to write on the Spanner table
    values: A list of rows to write to the table, in `columns` order.
  """
  _logger.debug('Upsert table=%s columns=%s values=%s', table_name, columns,
                values)
  sink.insert_or_update(table=table_name, columns=columns, values=values)
