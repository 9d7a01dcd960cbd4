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
"""Converts between mapped objects and Datastore entities."""

from typing import Any, Iterable, Type

from gcp_data import convert
from gcp_data import model

from google.cloud import datastore


class DatastoreEntityConverter(convert.EntityConverter):
  """EntityConverter that keeps the id field in the entity's key.

  The id field is not stored as a property: on read it's filled from the last
  element of the key path, on write the entity is expected to already carry
  its key.
  """

  def read(self, entity_class: Type[model.ModelObject],
           record: datastore.Entity) -> model.ModelObject:
    """See base class."""
    instance = super().read(entity_class, record)
    id_field = self._mapping_context.id_field_of(entity_class)
    if id_field is not None and record.key is not None:
      instance.__dict__[id_field.name] = record.key.id_or_name
    return instance

  def write(self, instance: model.Model, record: datastore.Entity) -> None:
    """See base class."""
    super().write(instance, record)
    entity_metadata = self._mapping_context.metadata_for(type(instance))
    record.exclude_from_indexes.update(
        name for name in self._columns_to_write(type(instance))
        if not entity_metadata.fields[name].indexed())

  def _columns_to_write(self, entity_class: Type[Any]) -> Iterable[str]:
    id_field = self._mapping_context.id_field_of(entity_class)
    return [
        column
        for column in self._mapping_context.metadata_for(entity_class).columns
        if id_field is None or column != id_field.name
    ]
