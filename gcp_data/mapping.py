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
"""Looks up the mapping metadata of entity classes."""

from typing import Any, Dict, List, Optional, Type

from gcp_data import error
from gcp_data import field
from gcp_data import metadata
from gcp_data import model


class MappingContext(object):
  """Registry of the mapping metadata of entity classes, keyed by class.

  Entries are added the first time a class is looked up and never change
  afterwards, so a single context can be shared by every template.
  """

  def __init__(self):
    self._entities = {}  # type: Dict[Type[Any], metadata.ModelMetadata]

  def metadata_for(self, entity_class: Type[Any]) -> metadata.ModelMetadata:
    """Returns the metadata of the given class.

    Raises:
      error.DataMappingError: if the class isn't a mapped Model subclass.
    """
    entity_metadata = self._entities.get(entity_class)
    if entity_metadata is None:
      if not (isinstance(entity_class, type) and
              issubclass(entity_class, model.Model) and
              'meta' in vars(entity_class)):
        raise error.DataMappingError(
            f'{entity_class!r} is not a mapped entity class')
      entity_metadata = entity_class.meta
      self._entities[entity_class] = entity_metadata
    return entity_metadata

  def collection_name_for(self, entity_class: Type[Any]) -> str:
    """Returns the Datastore kind or Spanner table of the given class."""
    return self.metadata_for(entity_class).collection

  def id_fields_of(self, entity_class: Type[Any]) -> List[field.Field]:
    entity_metadata = self.metadata_for(entity_class)
    return [
        entity_metadata.fields[name] for name in entity_metadata.primary_keys
    ]

  def id_field_of(self, entity_class: Type[Any]) -> Optional[field.Field]:
    """Returns the single identifier field of the class, or None if absent.

    Raises:
      error.DataMappingError: if the class declares more than one identifier
        field.
    """
    id_fields = self.id_fields_of(entity_class)
    if len(id_fields) > 1:
      raise error.DataMappingError(
          f'{entity_class.__name__} declares more than one id field: '
          f'{[f.name for f in id_fields]}')
    return id_fields[0] if id_fields else None


_mapping_context = MappingContext()


def mapping_context() -> MappingContext:
  return _mapping_context
