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
"""Field declarations and value types for mapped entities."""

import abc
import datetime
from typing import Any, Optional

from gcp_data import error


class FieldType(abc.ABC):
  """Base class for the value types a field can hold."""

  @abc.abstractmethod
  def validate_type(self, value: Any) -> None:
    """Raises error.ValidationError if value doesn't match the type."""
    raise NotImplementedError

  def __repr__(self) -> str:
    return f'{type(self).__name__}()'


class Field:
  """Represents a property of an entity, stored as a column or property.

  Attributes:
    name: Name of the field, or None if this hasn't been bound to a model yet.
    position: Declaration order of the field within its model.
  """
  name: Optional[str]
  position: int

  def __init__(
      self,
      field_type: FieldType,
      *,
      nullable: bool = False,
      primary_key: bool = False,
      indexed: bool = True,
  ):
    """Initializer.

    Args:
      field_type: Type of the field.
      nullable: Whether the field can be None.
      primary_key: Whether the field identifies the entity. For Spanner this is
        part of the table's primary key; for Datastore it becomes the id or
        name of the entity's key.
      indexed: Whether Datastore should index the property. Ignored by
        Spanner.
    """
    if not isinstance(field_type, FieldType):
      raise error.GcpDataError(
          f'Expected an instance of FieldType, got {field_type!r}')
    self.name = None
    self.position = 0
    self._type = field_type
    self._nullable = nullable
    self._primary_key = primary_key
    self._indexed = indexed

  def field_type(self) -> FieldType:
    """Returns the type of the field."""
    return self._type

  def nullable(self) -> bool:
    """Returns whether the field can be None."""
    return self._nullable

  def primary_key(self) -> bool:
    """Returns whether the field identifies the entity."""
    return self._primary_key

  def indexed(self) -> bool:
    return self._indexed

  def validate(self, value: Any) -> None:
    """Raises error.ValidationError if value isn't compatible with the field."""
    if value is None:
      if not self._nullable:
        raise error.ValidationError(
            f'None set for non-nullable field {self.name!r}')
    else:
      self._type.validate_type(value)


class Boolean(FieldType):
  """Represents a boolean type."""

  def validate_type(self, value: Any) -> None:
    """See base class."""
    del self  # Unused.
    if not isinstance(value, bool):
      raise error.ValidationError(f'{value!r} is not of type bool')


class Integer(FieldType):
  """Represents an integer type."""

  def validate_type(self, value: Any) -> None:
    """See base class."""
    del self  # Unused.
    if not isinstance(value, int) or isinstance(value, bool):
      raise error.ValidationError(f'{value!r} is not of type int')


class Float(FieldType):
  """Represents a float type."""

  def validate_type(self, value: Any) -> None:
    """See base class."""
    del self  # Unused.
    if not isinstance(value, (int, float)) or isinstance(value, bool):
      raise error.ValidationError(f'{value!r} is not of type float')


class String(FieldType):
  """Represents a string type."""

  def __init__(self, length: Optional[int] = None):
    """Initializer.

    Args:
      length: Maximum length of the String. Unbounded if not specified.
    """
    if length is not None and length <= 0:
      raise error.ValidationError('String length must be positive')
    self._length = length

  def validate_type(self, value: Any) -> None:
    """See base class."""
    if not isinstance(value, str):
      raise error.ValidationError(f'{value!r} is not of type str')
    if self._length is not None and len(value) > self._length:
      raise error.ValidationError(
          f'{value!r} is longer than {self._length} characters')

  def __repr__(self) -> str:
    if self._length is None:
      return 'String()'
    return f'String({self._length})'


class Timestamp(FieldType):
  """Represents a timestamp type."""

  def validate_type(self, value: Any) -> None:
    """See base class."""
    del self  # Unused.
    if not isinstance(value, datetime.datetime):
      raise error.ValidationError(f'{value!r} is not of type datetime')


class Bytes(FieldType):
  """Represents a bytes type."""

  def validate_type(self, value: Any) -> None:
    """See base class."""
    del self  # Unused.
    if not isinstance(value, bytes):
      raise error.ValidationError(f'{value!r} is not of type bytes')


class Array(FieldType):
  """Represents an array type."""

  def __init__(self, element_type: FieldType):
    """Initializer.

    Args:
      element_type: Type of the values in the array. Can't be an Array type
        itself.
    """
    if isinstance(element_type, Array):
      raise error.GcpDataError('Arrays of arrays are not supported.')
    self._element_type = element_type

  def validate_type(self, value: Any) -> None:
    """See base class."""
    if not isinstance(value, list):
      raise error.ValidationError(f'{value!r} is not of type list')
    for element in value:
      self._element_type.validate_type(element)

  def __repr__(self) -> str:
    return f'Array({self._element_type!r})'
