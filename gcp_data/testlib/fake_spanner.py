# Copyright 2020 Google LLC
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
"""In-memory stand-in for a Spanner database, for tests.

Snapshots, batches and transactions record what they're asked to do, and
batches and transactions only change the stored rows when they commit.
"""

from typing import Any, Dict, List, Tuple, Type

from google.api_core import exceptions
from google.cloud import spanner


class _Reader:
  """Reads committed rows."""

  def __init__(self, database: 'FakeDatabase'):
    self._database = database
    self.reads = []  # type: List[Tuple[str, List[str], spanner.KeySet]]

  def read(self, table, columns, keyset):
    self.reads.append((table, list(columns), keyset))
    return iter(self._database.rows(table, columns, keyset))


class _Writer:
  """Buffers mutations until commit."""

  def __init__(self, database: 'FakeDatabase'):
    self._database = database
    self.mutations = []  # type: List[Tuple[Any, ...]]
    self.committed = False
    self.rolled_back = False

  def insert(self, table, columns, values):
    self.mutations.append(('insert', table, list(columns), list(values)))

  def update(self, table, columns, values):
    self.mutations.append(('update', table, list(columns), list(values)))

  def insert_or_update(self, table, columns, values):
    self.mutations.append(
        ('insert_or_update', table, list(columns), list(values)))

  def delete(self, table, keyset):
    self.mutations.append(('delete', table, keyset))

  def commit(self):
    self._database.apply(self.mutations)
    self.committed = True


class FakeSnapshot(_Reader):
  """A snapshot, usable as its own context manager like SnapshotCheckout."""

  def __init__(self, database: 'FakeDatabase', options: Dict[str, Any]):
    super().__init__(database)
    self.options = options
    self.closed = False

  def __enter__(self) -> 'FakeSnapshot':
    return self

  def __exit__(self, exc_type, exc_value, traceback) -> None:
    self.closed = True


class FakeBatch(_Writer):
  """A batch, committed when its `with` block exits cleanly."""

  def __enter__(self) -> 'FakeBatch':
    return self

  def __exit__(self, exc_type, exc_value, traceback) -> None:
    if exc_type is None:
      self.commit()


class FakeTransaction(_Reader, _Writer):
  """A read-write transaction. Reads don't see its own buffered mutations."""

  def __init__(self, database: 'FakeDatabase'):
    _Reader.__init__(self, database)
    _Writer.__init__(self, database)


class FakeDatabase:
  """Implements the subset of spanner Database the templates use.

  Attributes:
    snapshots: Every snapshot handed out, in order.
    batches: Every batch handed out, in order.
    transactions: Every read-write transaction run, in order.
  """

  def __init__(self, primary_keys: Dict[str, List[str]]):
    """Initializer.

    Args:
      primary_keys: Maps each table name to its primary key columns.
    """
    self._primary_keys = primary_keys
    self._tables = {
        table: {} for table in primary_keys
    }  # type: Dict[str, Dict[Tuple[Any, ...], Dict[str, Any]]]
    self.snapshots = []  # type: List[FakeSnapshot]
    self.batches = []  # type: List[FakeBatch]
    self.transactions = []  # type: List[FakeTransaction]

  @classmethod
  def for_models(cls, *model_classes: Type[Any]) -> 'FakeDatabase':
    return cls({
        model_class.meta.collection: list(model_class.meta.primary_keys)
        for model_class in model_classes
    })

  def snapshot(self, **options: Any) -> FakeSnapshot:
    snapshot = FakeSnapshot(self, options)
    self.snapshots.append(snapshot)
    return snapshot

  def batch(self) -> FakeBatch:
    batch = FakeBatch(self)
    self.batches.append(batch)
    return batch

  def run_in_transaction(self, func, *args, **kwargs):
    transaction = FakeTransaction(self)
    self.transactions.append(transaction)
    try:
      result = func(transaction, *args, **kwargs)
    except Exception:
      transaction.rolled_back = True
      raise
    transaction.commit()
    return result

  def rows(self, table: str, columns: List[str],
           keyset: spanner.KeySet) -> List[List[Any]]:
    stored = self._tables[table]
    if keyset.all_:
      found = [stored[key] for key in sorted(stored)]
    else:
      found = [
          stored[tuple(key)] for key in keyset.keys if tuple(key) in stored
      ]
    return [[row.get(column) for column in columns] for row in found]

  def apply(self, mutations: List[Tuple[Any, ...]]) -> None:
    for mutation in mutations:
      op, table = mutation[0], mutation[1]
      stored = self._tables[table]
      if op == 'delete':
        keyset = mutation[2]
        if keyset.all_:
          stored.clear()
        for key in keyset.keys:
          stored.pop(tuple(key), None)
        continue
      columns, values = mutation[2], mutation[3]
      for value in values:
        row = dict(zip(columns, value))
        key = tuple(row[column] for column in self._primary_keys[table])
        if op == 'insert' and key in stored:
          raise exceptions.AlreadyExists(f'Row {key} already exists in {table}')
        if op == 'update' and key not in stored:
          raise exceptions.NotFound(f'Row {key} not found in {table}')
        stored.setdefault(key, {}).update(row)

  def write_batches(self) -> List[FakeBatch]:
    return [batch for batch in self.batches if batch.mutations]
