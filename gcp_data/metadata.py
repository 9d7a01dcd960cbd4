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
"""Hold information about a Model extracted from the class attributes."""

from typing import Any, Dict, List, Optional, Type

from gcp_data import error
from gcp_data import field


class ModelMetadata(object):
  """Hold information about a Model extracted from the class attributes."""

  def __init__(self,
               collection: Optional[str] = None,
               fields: Optional[Dict[str, field.Field]] = None,
               model_class: Optional[Type[Any]] = None):
    self.columns = []  # type: List[str]
    self.collection = collection or ''
    self.fields = dict(fields or {})
    self._finalized = False
    self.model_class = model_class
    self.primary_keys = []  # type: List[str]

  def finalize(self) -> None:
    """Finish generating metadata state.

    The ordering of columns and the set of identifier fields depend on all
    fields having been added, so they are only calculated once the model class
    has been fully declared. A model with no declared collection name is
    stored under its class name.
    """
    if self._finalized:
      raise error.GcpDataError('Metadata was already finalized')
    sorted_fields = list(sorted(self.fields.values(), key=lambda f: f.position))
    self.columns = [f.name for f in sorted_fields]
    self.primary_keys = [f.name for f in sorted_fields if f.primary_key()]
    if not self.collection and self.model_class is not None:
      self.collection = self.model_class.__name__
    self._finalized = True

  @property
  def finalized(self) -> bool:
    return self._finalized

  def add_metadata(self, metadata: 'ModelMetadata') -> None:
    self.collection = metadata.collection or self.collection
    self.fields.update(metadata.fields)

  def add_field(self, name: str, new_field: field.Field) -> None:
    if name in self.fields:
      raise error.GcpDataError(f'Already contains a field named "{name}"')
    new_field.name = name
    new_field.position = len(self.fields)
    self.fields[name] = new_field
