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
"""In-memory stand-in for a Datastore client, for tests.

Every call is recorded in `calls` as a (method, args) tuple so tests can
assert on exactly what reached the store.
"""

from typing import Any, Dict, List, Optional, Tuple

from google.cloud import datastore


def _copy_entity(entity: datastore.Entity) -> datastore.Entity:
  copied = datastore.Entity(
      key=entity.key, exclude_from_indexes=tuple(entity.exclude_from_indexes))
  copied.update(entity)
  return copied


class FakeQuery:
  """Kind-only query over the entities of a FakeDatastoreClient."""

  def __init__(self, client: 'FakeDatastoreClient', kind: Optional[str]):
    self._client = client
    self.kind = kind

  def fetch(self, read_time=None):
    self._client.calls.append(('fetch', (self.kind, read_time)))
    return iter([
        _copy_entity(entity)
        for entity in self._client.entities.values()
        if entity.key.kind == self.kind
    ])


class FakeTransaction:
  """Buffers writes until the `with` block exits without an exception.

  Like datastore.Transaction, it only has the per-entity put and delete of a
  datastore.Batch.
  """

  def __init__(self, client: 'FakeDatastoreClient', read_only: bool,
               read_time: Any):
    self._client = client
    self.read_only = read_only
    self.read_time = read_time
    self.calls = []  # type: List[Tuple[str, Any]]
    self.committed = False
    self.rolled_back = False

  def __enter__(self) -> 'FakeTransaction':
    self.calls.append(('begin', ()))
    return self

  def __exit__(self, exc_type, exc_value, traceback) -> None:
    if exc_type is None:
      self.commit()
    else:
      self.rollback()

  def put(self, entity: datastore.Entity) -> None:
    self.calls.append(('put', (_copy_entity(entity),)))

  def delete(self, key: datastore.Key) -> None:
    self.calls.append(('delete', (key,)))

  @property
  def mutations(self) -> List[Tuple[str, Any]]:
    return [call for call in self.calls if call[0] != 'begin']

  def commit(self) -> None:
    for method, (value,) in self.mutations:
      getattr(self._client, '_' + method + '_multi')([value])
    self.committed = True

  def rollback(self) -> None:
    self.rolled_back = True


class FakeDatastoreClient:
  """Implements the subset of datastore.Client the templates use."""

  def __init__(self, project: str = 'test-project'):
    self.project = project
    self.entities = {}  # type: Dict[Tuple[Any, ...], datastore.Entity]
    self.calls = []  # type: List[Tuple[str, Any]]
    self.transactions = []  # type: List[FakeTransaction]

  def key(self, *path_args: Any) -> datastore.Key:
    return datastore.Key(*path_args, project=self.project)

  def query(self, kind: Optional[str] = None) -> FakeQuery:
    return FakeQuery(self, kind)

  def transaction(self, read_only: bool = False,
                  read_time: Any = None) -> FakeTransaction:
    transaction = FakeTransaction(self, read_only, read_time)
    self.transactions.append(transaction)
    return transaction

  def get(self, key, transaction=None, read_time=None):
    self.calls.append(('get', (key, transaction, read_time)))
    entity = self.entities.get(key.flat_path)
    return _copy_entity(entity) if entity is not None else None

  def get_multi(self, keys, transaction=None, read_time=None):
    self.calls.append(('get_multi', (list(keys), transaction, read_time)))
    return [
        _copy_entity(self.entities[key.flat_path])
        for key in keys
        if key.flat_path in self.entities
    ]

  def put_multi(self, entities):
    self.calls.append(('put_multi', (list(entities),)))
    self._put_multi(entities)

  def delete_multi(self, keys):
    self.calls.append(('delete_multi', (list(keys),)))
    self._delete_multi(keys)

  def _put_multi(self, entities):
    for entity in entities:
      self.entities[entity.key.flat_path] = _copy_entity(entity)

  def _delete_multi(self, keys):
    for key in keys:
      self.entities.pop(key.flat_path, None)

  def write_calls(self) -> List[Tuple[str, Any]]:
    """Returns the recorded calls that wrote to the store directly."""
    return [
        call for call in self.calls
        if call[0] in ('put_multi', 'delete_multi')
    ]
