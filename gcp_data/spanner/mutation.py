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
"""Spanner mutations and the factory building them from mapped objects."""

import dataclasses
import enum
from typing import Any, Dict, Iterable, List, Optional, Type

from gcp_data import convert
from gcp_data import mapping
from gcp_data import model
from gcp_data.spanner import table_apis

from google.cloud import spanner


class Op(enum.Enum):
  INSERT = 'insert'
  UPDATE = 'update'
  UPSERT = 'insert_or_update'
  DELETE = 'delete'


_WRITERS = {
    Op.INSERT: table_apis.insert,
    Op.UPDATE: table_apis.update,
    Op.UPSERT: table_apis.upsert,
}


@dataclasses.dataclass(frozen=True)
class Mutation:
  """A write to a single table.

  Attributes:
    op: What the mutation does.
    table: The table being modified.
    columns: The columns written, for everything but deletes.
    values: The rows written, each in `columns` order.
    keyset: The rows deleted, for deletes.
  """
  op: Op
  table: str
  columns: List[str] = dataclasses.field(default_factory=list)
  values: List[List[Any]] = dataclasses.field(default_factory=list)
  keyset: Optional[spanner.KeySet] = None

  def apply(self, sink: Any) -> None:
    """Writes the mutation to a batch or buffers it in a transaction."""
    if self.op is Op.DELETE:
      table_apis.delete(sink, self.table, self.keyset)
    else:
      _WRITERS[self.op](sink, self.table, self.columns, self.values)


class SpannerMutationFactory(object):
  """Builds mutations for mapped objects."""

  def __init__(self,
               converter: convert.EntityConverter,
               mapping_context: Optional[mapping.MappingContext] = None):
    self._converter = converter
    self._mapping_context = mapping_context or mapping.mapping_context()

  def insert(self, instances: Iterable[model.Model]) -> List[Mutation]:
    return self._write(Op.INSERT, instances)

  def update(self, instances: Iterable[model.Model]) -> List[Mutation]:
    return self._write(Op.UPDATE, instances)

  def upsert(self, instances: Iterable[model.Model]) -> List[Mutation]:
    return self._write(Op.UPSERT, instances)

  def delete(self, entity_class: Type[Any],
             keys: Iterable[List[Any]]) -> Mutation:
    """Returns a mutation deleting the rows of entity_class under keys."""
    return Mutation(
        Op.DELETE,
        self._mapping_context.collection_name_for(entity_class),
        keyset=spanner.KeySet(keys=[list(key) for key in keys]))

  def _write(self, op: Op, instances: Iterable[model.Model]) -> List[Mutation]:
    """Returns one mutation per model class among instances."""
    rows_by_class = {}  # type: Dict[Type[Any], List[List[Any]]]
    for instance in instances:
      row = {}  # type: Dict[str, Any]
      self._converter.write(instance, row)
      columns = self._mapping_context.metadata_for(type(instance)).columns
      rows_by_class.setdefault(type(instance), []).append(
          [row[column] for column in columns])

    return [
        Mutation(op, self._mapping_context.collection_name_for(entity_class),
                 list(self._mapping_context.metadata_for(entity_class).columns),
                 rows)
        for entity_class, rows in rows_by_class.items()
    ]
