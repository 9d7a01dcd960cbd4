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
"""Resolves Spanner primary keys."""

from typing import Any, List, Type

from gcp_data import error
from gcp_data import field
from gcp_data import keys


class SpannerKeyResolver(keys.KeyResolver):
  """Builds primary keys: lists of key column values in declaration order.

  A list or tuple passed as an id is taken to already be a full primary key.
  A scalar id is only accepted for tables with a single key column. It must be
  an int or a str, and must match that column's type.
  """

  def is_native_key(self, value: Any) -> bool:
    """See base class."""
    return isinstance(value, (list, tuple))

  def _new_key(self, entity_class: Type[Any],
               id_values: List[Any]) -> List[Any]:
    del entity_class  # Unused.
    return list(id_values)

  def _id_fields(self, entity_class: Type[Any]) -> List[field.Field]:
    id_fields = self._mapping_context.id_fields_of(entity_class)
    if not id_fields:
      raise error.DataMappingError(
          f'{entity_class.__name__} does not declare a primary key')
    return id_fields

  def _convert_id(self, raw_id: Any, entity_class: Type[Any]) -> Any:
    id_fields = self._id_fields(entity_class)
    if len(id_fields) != 1:
      raise error.DataMappingError(
          f'{entity_class.__name__} has a composite primary key '
          f'{[f.name for f in id_fields]}; pass the id as a list')
    id_field, = id_fields
    raw_id = super()._convert_id(raw_id, entity_class)
    try:
      id_field.field_type().validate_type(raw_id)
    except error.ValidationError as ex:
      raise error.DataMappingError(
          f'id type not supported: {ex.args[0]} for '
          f'{entity_class.__name__}.{id_field.name}') from ex
    return raw_id
