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
"""Shared implementation of the store templates.

Every operation goes through two switches on the template's mode: one picks
the context reads run on, the other decides what happens to mutations. A
standalone template reads from fresh store contexts and writes immediately; a
read-write template reads from and buffers into its transaction; a read-only
template reads from its snapshot and refuses to write.
"""

import abc
import contextlib
import datetime
import logging
from typing import Any, Callable, ContextManager, Iterable, List, Optional, Type

from gcp_data import convert
from gcp_data import keys
from gcp_data import mapping
from gcp_data import mode as mode_lib
from gcp_data import model
from gcp_data import operations

_logger = logging.getLogger(__name__)


class Template(operations.DataOperations):
  """Base class for the Datastore and Spanner templates.

  Templates bound to a transaction are created by the
  perform_*_transaction methods and must not be used after the callable they
  were passed to returns. They are not safe to share between threads.
  """

  def __init__(self,
               converter: convert.EntityConverter,
               key_resolver: keys.KeyResolver,
               mapping_context: Optional[mapping.MappingContext] = None,
               template_mode: Optional[mode_lib.TemplateMode] = None):
    self._converter = converter
    self._key_resolver = key_resolver
    self._mapping_context = mapping_context or mapping.mapping_context()
    self._mode = template_mode or mode_lib.TemplateMode.standalone()

  @property
  def mode(self) -> mode_lib.TemplateMode:
    return self._mode

  @property
  def converter(self) -> convert.EntityConverter:
    return self._converter

  @property
  def mapping_context(self) -> mapping.MappingContext:
    return self._mapping_context

  # Store hooks
  @abc.abstractmethod
  def _standalone_read_context(
      self, timestamp: Optional[datetime.datetime]) -> ContextManager[Any]:
    """Returns a context manager yielding a fresh store read context."""
    raise NotImplementedError

  def _transaction_read_context(self, handle: Any) -> Any:
    return handle

  @abc.abstractmethod
  def _write_mutations(self, mutations: List[Any]) -> None:
    """Applies mutations to the store right away."""
    raise NotImplementedError

  def _buffer_mutations(self, handle: Any, mutations: List[Any]) -> None:
    for mutation in mutations:
      mutation.apply(handle)

  @abc.abstractmethod
  def _upsert_mutations(self, instances: List[model.Model]) -> List[Any]:
    raise NotImplementedError

  @abc.abstractmethod
  def _delete_mutations(self, entity_class: Type[Any],
                        keys_to_delete: List[Any]) -> List[Any]:
    raise NotImplementedError

  @abc.abstractmethod
  def _run_read_write(
      self, operations_: Callable[[operations.DataOperations],
                                  operations.CallableReturn]
  ) -> operations.CallableReturn:
    """Opens a read-write transaction and calls operations_ in it."""
    raise NotImplementedError

  @abc.abstractmethod
  def _run_read_only(
      self, operations_: Callable[[operations.DataOperations],
                                  operations.CallableReturn],
      timestamp: Optional[datetime.datetime]) -> operations.CallableReturn:
    """Opens a read-only transaction and calls operations_ in it."""
    raise NotImplementedError

  @abc.abstractmethod
  def _with_mode(self, template_mode: mode_lib.TemplateMode) -> 'Template':
    """Returns a template sharing this one's collaborators in another mode."""
    raise NotImplementedError

  # Mode switches
  def read_context(
      self,
      timestamp: Optional[datetime.datetime] = None) -> ContextManager[Any]:
    """Returns a context manager yielding the context reads should run on.

    Args:
      timestamp: If set, the context reads data as it was at this time. Only
        standalone templates support this; the staleness of a read-only
        transaction is fixed when it's opened.

    Raises:
      error.TransactionSemanticsError: if a timestamp is given to a template
        bound to a transaction.
    """
    self._mode.check_can_read_at(timestamp)
    if not self._mode.scoped:
      return self._standalone_read_context(timestamp)
    return contextlib.nullcontext(
        self._transaction_read_context(self._mode.handle))

  def apply_mutations(self, mutations: List[Any]) -> None:
    """Writes mutations now, or buffers them in the current transaction.

    Raises:
      error.TransactionSemanticsError: if the template is bound to a
        read-only transaction.
    """
    self._mode.check_can_mutate()
    if self._mode.scope is mode_lib.Scope.READ_WRITE:
      _logger.debug('Buffering %d mutation(s) in transaction', len(mutations))
      self._buffer_mutations(self._mode.handle, mutations)
    else:
      self._write_mutations(mutations)

  # Keys
  def get_key(self, entity: model.Model) -> Any:
    return self._key_resolver.key_for(entity)

  def get_key_from_id(self, id_: Any, entity_class: Type[Any]) -> Any:
    return self._key_resolver.key_from_id(id_, entity_class)

  # Transactions
  def perform_read_write_transaction(self, operations_):
    """See base class."""
    self._mode.check_can_begin_transaction()
    _logger.debug('Opening read-write transaction')
    return self._run_read_write(operations_)

  def perform_read_only_transaction(self, operations_, timestamp=None):
    """See base class."""
    self._mode.check_can_begin_transaction()
    _logger.debug('Opening read-only transaction timestamp=%s', timestamp)
    return self._run_read_only(operations_, timestamp)

  # Writes
  def save(self, instance: model.Model) -> None:
    """See base class."""
    self.apply_mutations(self._upsert_mutations([instance]))

  def save_all(self, instances: Iterable[model.Model]) -> None:
    """See base class."""
    # Empty writes still fail in a read-only transaction.
    self._mode.check_can_mutate()
    instances = list(instances)
    if instances:
      self.apply_mutations(self._upsert_mutations(instances))

  def delete_by_id(self, id_: Any, entity_class: Type[Any]) -> None:
    """See base class."""
    key = self.get_key_from_id(id_, entity_class)
    self.apply_mutations(self._delete_mutations(entity_class, [key]))

  def delete_all_by_id(self, ids: Iterable[Any],
                       entity_class: Type[Any]) -> None:
    """See base class."""
    self._mode.check_can_mutate()
    keys_to_delete = [self.get_key_from_id(id_, entity_class) for id_ in ids]
    if keys_to_delete:
      self.apply_mutations(
          self._delete_mutations(entity_class, keys_to_delete))

  def delete(self, instance: model.Model) -> None:
    """See base class."""
    key = self.get_key(instance)
    self.apply_mutations(self._delete_mutations(type(instance), [key]))

  def delete_all(self, entity_class: Type[Any]) -> None:
    """See base class.

    The objects are read first and deleted by key with a single write.
    """
    self._mode.check_can_mutate()
    keys_to_delete = [
        self.get_key(instance) for instance in self.find_all(entity_class)
    ]
    if keys_to_delete:
      self.apply_mutations(
          self._delete_mutations(entity_class, keys_to_delete))

  # Reads built on the others
  def count(self, entity_class: Type[Any]) -> int:
    """See base class.

    Counts by reading every object of the type, so the cost grows with the
    size of the collection.
    """
    return len(self.find_all(entity_class))

  def exists_by_id(self, id_: Any, entity_class: Type[Any]) -> bool:
    """See base class."""
    return self.find_by_id(id_, entity_class) is not None
