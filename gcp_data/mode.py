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
"""The transaction scope a template runs its operations in."""

import dataclasses
import datetime
import enum
from typing import Any, Optional

from gcp_data import error


class Scope(enum.Enum):
  STANDALONE = 'standalone'
  READ_WRITE = 'read-write'
  READ_ONLY = 'read-only'


@dataclasses.dataclass(frozen=True)
class TemplateMode:
  """Which transaction, if any, a template is bound to.

  A standalone template issues every operation as its own unit of work. A
  scoped template routes every read and write through `handle`, the store's
  transaction object, and only lives as long as that transaction.

  Attributes:
    scope: The kind of transaction the template is bound to.
    handle: The store transaction (or snapshot), None when standalone.
    read_timestamp: The time a read-only transaction reads at, or None to read
      the latest committed data.
  """
  scope: Scope
  handle: Any = None
  read_timestamp: Optional[datetime.datetime] = None

  @classmethod
  def standalone(cls) -> 'TemplateMode':
    return cls(Scope.STANDALONE)

  @classmethod
  def read_write(cls, handle: Any) -> 'TemplateMode':
    return cls(Scope.READ_WRITE, handle)

  @classmethod
  def read_only(
      cls,
      handle: Any,
      read_timestamp: Optional[datetime.datetime] = None) -> 'TemplateMode':
    return cls(Scope.READ_ONLY, handle, read_timestamp)

  @property
  def scoped(self) -> bool:
    return self.scope is not Scope.STANDALONE

  def check_can_begin_transaction(self) -> None:
    if self.scoped:
      raise error.TransactionSemanticsError(
          f'A {self.scope.value} transaction is already under execution. '
          'Opening sub-transactions is not supported!')

  def check_can_mutate(self) -> None:
    if self.scope is Scope.READ_ONLY:
      raise error.TransactionSemanticsError(
          'read-only transactions do not support mutations')

  def check_can_read_at(self, timestamp: Optional[datetime.datetime]) -> None:
    if timestamp is not None and self.scoped:
      raise error.TransactionSemanticsError(
          'Getting stale snapshot read contexts is not supported in '
          f'{self.scope.value} transaction templates.')
