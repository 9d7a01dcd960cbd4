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
"""Resolves Datastore keys."""

from typing import Any, List, Optional, Type

from gcp_data import error
from gcp_data import field
from gcp_data import keys
from gcp_data import mapping

from google.cloud import datastore


class DatastoreKeyResolver(keys.KeyResolver):
  """Builds root keys of the form (kind, id_or_name).

  Keys are created by the client so they carry its project, namespace and
  database.
  """

  def __init__(self,
               client: datastore.Client,
               mapping_context: Optional[mapping.MappingContext] = None):
    super().__init__(mapping_context)
    self._client = client

  def is_native_key(self, value: Any) -> bool:
    """See base class."""
    return isinstance(value, datastore.Key)

  def _new_key(self, entity_class: Type[Any],
               id_values: List[Any]) -> datastore.Key:
    id_or_name, = id_values
    return self._client.key(self._collection(entity_class), id_or_name)

  def _id_fields(self, entity_class: Type[Any]) -> List[field.Field]:
    id_field = self._mapping_context.id_field_of(entity_class)
    if id_field is None:
      raise error.DataMappingError(
          f'{entity_class.__name__} does not declare an id field')
    return [id_field]
