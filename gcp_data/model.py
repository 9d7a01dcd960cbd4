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
"""Base class for objects mapped to Datastore entities or Spanner rows."""

from typing import Any, Dict, List, Optional, Type, TypeVar

from gcp_data import error
from gcp_data import field
from gcp_data import metadata

_COLLECTION_ATTRIBUTES = ('__collection__', '__kind__', '__table__')


class ModelMetaclass(type):
  """Populates ModelMetadata based on class attributes."""

  def __new__(mcs, name: str, bases: Any, attrs: Dict[str, Any], **kwargs: Any):
    parents = [base for base in bases if isinstance(base, ModelMetaclass)]
    if not parents:
      return super().__new__(mcs, name, bases, attrs, **kwargs)

    model_metadata = metadata.ModelMetadata()
    for parent in parents:
      if 'meta' in vars(parent):
        model_metadata.add_metadata(parent.meta)

    non_model_attrs = {}
    for key, value in attrs.items():
      if key in _COLLECTION_ATTRIBUTES:
        model_metadata.collection = value
      if isinstance(value, field.Field):
        model_metadata.add_field(key, value)
      else:
        non_model_attrs[key] = value

    cls = super().__new__(mcs, name, bases, non_model_attrs, **kwargs)
    model_metadata.model_class = cls
    model_metadata.finalize()
    cls.meta = model_metadata
    return cls

  def __getattr__(cls, name: str) -> field.Field:
    # Only reached when normal lookup fails, e.g. for declared fields.
    if name != 'meta' and 'meta' in vars(cls) and name in cls.meta.fields:
      return cls.meta.fields[name]
    raise AttributeError(name)

  @property
  def collection(cls) -> str:
    return cls.meta.collection

  @property
  def columns(cls) -> List[str]:
    return cls.meta.columns

  @property
  def fields(cls) -> Dict[str, field.Field]:
    return cls.meta.fields

  @property
  def primary_keys(cls) -> List[str]:
    return cls.meta.primary_keys

  def validate_value(cls, field_name, value, error_type=error.GcpDataError):
    try:
      cls.fields[field_name].validate(value)
    except error.ValidationError as ex:
      raise error_type(*ex.args)


class Model(metaclass=ModelMetaclass):
  """Maps to a Datastore kind or a Spanner table.

  Subclasses declare their fields as class attributes and name their
  collection with `__kind__` (Datastore) or `__table__` (Spanner):

    class Book(Model):
      __kind__ = 'Book'
      isbn = field.Field(field.String(), primary_key=True)
      title = field.Field(field.String(), nullable=True)

  Fields that are not given a value start out as None.
  """

  def __init__(self, values: Optional[Dict[str, Any]] = None, **kwargs: Any):
    values = dict(values or {}, **kwargs)
    unknown = set(values) - set(self._columns)
    if unknown:
      raise ValueError(
          f'Invalid fields set on {type(self).__name__}: {sorted(unknown)}')

    for column in self._columns:
      value = values.get(column)
      if value is not None:
        self._metaclass.validate_value(column, value, ValueError)
      self.__dict__[column] = value

  @classmethod
  def from_record(cls, values: Dict[str, Any]) -> 'Model':
    """Builds an object from values read back from a store.

    Stored values are trusted, so no validation happens.
    """
    instance = cls.__new__(cls)
    for column in cls.columns:
      instance.__dict__[column] = values.get(column)
    return instance

  def __setattr__(self, name: str, value: Any) -> None:
    if name in self._fields and value is not None:
      self._metaclass.validate_value(name, value, AttributeError)
    super().__setattr__(name, value)

  def __eq__(self, other: Any) -> bool:
    if type(other) is not type(self):
      return NotImplemented
    return self.values == other.values

  def __repr__(self) -> str:
    values = ', '.join(f'{key}={value!r}' for key, value in self.values.items())
    return f'{type(self).__name__}({values})'

  @property
  def _metaclass(self) -> Type['Model']:
    return type(self)

  @property
  def _columns(self) -> List[str]:
    return self._metaclass.columns

  @property
  def _fields(self) -> Dict[str, field.Field]:
    return self._metaclass.fields

  @property
  def values(self) -> Dict[str, Any]:
    """Gets all attributes.

    Returns:
      Dictionary mapping from attribute name to value.
    """
    return {key: getattr(self, key) for key in self._columns}


ModelObject = TypeVar('ModelObject', bound=Model)
