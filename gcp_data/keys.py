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
"""Derives store keys from mapped objects and raw identifiers."""

import abc
from typing import Any, List, Optional, Type, Union

from gcp_data import error
from gcp_data import field
from gcp_data import mapping


class KeyResolver(abc.ABC):
  """Resolves the store key of an object or of a raw id plus entity class.

  Resolution is deterministic and has no side effects: the same class and id
  always give an equal key.
  """

  def __init__(self, mapping_context: Optional[mapping.MappingContext] = None):
    self._mapping_context = mapping_context or mapping.mapping_context()

  @abc.abstractmethod
  def is_native_key(self, value: Any) -> bool:
    """Returns whether value is already a key of the store."""
    raise NotImplementedError

  @abc.abstractmethod
  def _new_key(self, entity_class: Type[Any], id_values: List[Any]) -> Any:
    raise NotImplementedError

  @abc.abstractmethod
  def _id_fields(self, entity_class: Type[Any]) -> List[field.Field]:
    """Returns the identifier fields of the class, in key order.

    Raises:
      error.DataMappingError: if the class doesn't declare usable identifier
        fields.
    """
    raise NotImplementedError

  def key_for(self, entity: Any) -> Any:
    """Returns the key of a mapped object.

    Raises:
      error.DataMappingError: if the object's class has no identifier field.
      ValueError: if an identifier field of the object is None.
    """
    entity_class = type(entity)
    id_values = []
    for id_field in self._id_fields(entity_class):
      value = getattr(entity, id_field.name)
      if value is None:
        raise ValueError(
            f'Cannot resolve the key of a {entity_class.__name__} whose id '
            f'field {id_field.name!r} is None')
      id_values.append(value)
    return self._new_key(entity_class, id_values)

  def key_from_id(self, raw_id: Any, entity_class: Type[Any]) -> Any:
    """Returns the key for raw_id in the collection of entity_class.

    A raw_id that is already a key of the store is returned unmodified.

    Raises:
      error.DataMappingError: if raw_id has an unsupported type.
    """
    if self.is_native_key(raw_id):
      return raw_id
    return self._new_key(entity_class, [self._convert_id(raw_id, entity_class)])

  def _convert_id(self, raw_id: Any,
                  entity_class: Type[Any]) -> Union[int, str]:
    del entity_class  # Unused.
    if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
      raise error.DataMappingError(
          f'id type not supported: {type(raw_id).__name__} ({raw_id!r}); '
          'use an int or a str')
    return raw_id

  def _collection(self, entity_class: Type[Any]) -> str:
    return self._mapping_context.collection_name_for(entity_class)
