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
"""Operations every template supports, in and out of transactions."""

import abc
import datetime
from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar

from gcp_data import model

CallableReturn = TypeVar('CallableReturn')


class DataOperations(abc.ABC):
  """Reads and writes mapped objects.

  Ids passed to the *_by_id methods may be keys of the store, which are used
  as-is, or raw values (an int or a str) that are turned into a key in the
  collection of `entity_class`.

  Code written against this interface behaves the same whether it runs on a
  standalone template or on one bound to a transaction, apart from what the
  transaction can see.
  """

  @abc.abstractmethod
  def find_by_id(
      self,
      id_: Any,
      entity_class: Type[model.ModelObject],
      timestamp: Optional[datetime.datetime] = None
  ) -> Optional[model.ModelObject]:
    """Gets an object by its id.

    Args:
      id_: The id of the object.
      entity_class: The type of the object.
      timestamp: If set, read the data as it was at this time.

    Returns:
      The object, or None if nothing is stored under the id.
    """
    raise NotImplementedError

  @abc.abstractmethod
  def find_all_by_id(
      self,
      ids: Iterable[Any],
      entity_class: Type[model.ModelObject],
      timestamp: Optional[datetime.datetime] = None
  ) -> List[model.ModelObject]:
    """Gets the objects stored under the given ids with a single read.

    Ids with nothing stored under them are skipped.
    """
    raise NotImplementedError

  @abc.abstractmethod
  def find_all(
      self,
      entity_class: Type[model.ModelObject],
      timestamp: Optional[datetime.datetime] = None
  ) -> List[model.ModelObject]:
    """Gets every stored object of the given type."""
    raise NotImplementedError

  @abc.abstractmethod
  def save(self, instance: model.Model) -> None:
    """Inserts or updates an object."""
    raise NotImplementedError

  @abc.abstractmethod
  def save_all(self, instances: Iterable[model.Model]) -> None:
    """Inserts or updates several objects with a single write."""
    raise NotImplementedError

  @abc.abstractmethod
  def delete_by_id(self, id_: Any, entity_class: Type[Any]) -> None:
    """Deletes the object stored under the id. Missing objects are ignored."""
    raise NotImplementedError

  @abc.abstractmethod
  def delete_all_by_id(self, ids: Iterable[Any],
                       entity_class: Type[Any]) -> None:
    """Deletes the objects stored under the ids with a single write."""
    raise NotImplementedError

  @abc.abstractmethod
  def delete(self, instance: model.Model) -> None:
    """Deletes an object."""
    raise NotImplementedError

  @abc.abstractmethod
  def delete_all(self, entity_class: Type[Any]) -> None:
    """Deletes every stored object of the given type."""
    raise NotImplementedError

  @abc.abstractmethod
  def count(self, entity_class: Type[Any]) -> int:
    """Returns the number of stored objects of the given type."""
    raise NotImplementedError

  @abc.abstractmethod
  def exists_by_id(self, id_: Any, entity_class: Type[Any]) -> bool:
    """Returns whether an object is stored under the id."""
    raise NotImplementedError

  @abc.abstractmethod
  def perform_read_write_transaction(
      self, operations: Callable[['DataOperations'], CallableReturn]
  ) -> CallableReturn:
    """Runs operations in a read-write transaction.

    `operations` is called with a template bound to the transaction; its
    writes are buffered and committed when it returns. If it raises, the
    transaction is rolled back and the exception propagates.

    Args:
      operations: The callable to run in the transaction.

    Returns:
      The return value of `operations`.

    Raises:
      error.TransactionSemanticsError: if this template is already bound to a
        transaction.
    """
    raise NotImplementedError

  @abc.abstractmethod
  def perform_read_only_transaction(
      self,
      operations: Callable[['DataOperations'], CallableReturn],
      timestamp: Optional[datetime.datetime] = None) -> CallableReturn:
    """Runs operations in a read-only transaction.

    Args:
      operations: The callable to run in the transaction. Any write it
        attempts raises error.TransactionSemanticsError.
      timestamp: If set, every read in the transaction sees the data as it was
        at this time. Otherwise reads see the latest committed data.

    Returns:
      The return value of `operations`.

    Raises:
      error.TransactionSemanticsError: if this template is already bound to a
        transaction.
    """
    raise NotImplementedError
