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
"""Converts between mapped objects and store records."""

from typing import Any, Iterable, Mapping, MutableMapping, Optional, Type

from gcp_data import error
from gcp_data import mapping
from gcp_data import model


class EntityConverter(object):
  """Reads objects from records and writes objects into records.

  A record is a mapping from field name to value: a Spanner row zipped with
  its column names, or a Datastore entity.
  """

  def __init__(self, mapping_context: Optional[mapping.MappingContext] = None):
    self._mapping_context = mapping_context or mapping.mapping_context()

  @property
  def mapping_context(self) -> mapping.MappingContext:
    return self._mapping_context

  def read(self, entity_class: Type[model.ModelObject],
           record: Mapping[str, Any]) -> model.ModelObject:
    """Builds an instance of entity_class from the values in record."""
    entity_metadata = self._mapping_context.metadata_for(entity_class)
    values = {
        column: record.get(column)
        for column in entity_metadata.columns
        if column in record
    }
    return entity_class.from_record(values)

  def write(self, instance: model.Model,
            record: MutableMapping[str, Any]) -> None:
    """Copies the field values of instance into record.

    Raises:
      error.DataMappingError: if a value doesn't match the type of its field.
    """
    entity_metadata = self._mapping_context.metadata_for(type(instance))
    for column in self._columns_to_write(type(instance)):
      value = getattr(instance, column)
      try:
        entity_metadata.fields[column].validate(value)
      except error.ValidationError as ex:
        raise error.DataMappingError(
            f'Invalid value for {type(instance).__name__}.{column}: '
            f'{ex.args[0]}') from ex
      record[column] = value

  def _columns_to_write(self, entity_class: Type[Any]) -> Iterable[str]:
    return self._mapping_context.metadata_for(entity_class).columns
