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
"""Datastore writes, applied to a client or buffered in a transaction.

A client writes immediately with one put_multi or delete_multi call. A
transaction only has the per-entity put and delete of a datastore.Batch, and
holds the writes until it commits.
"""

import dataclasses
import logging
from typing import List

from google.cloud import datastore

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Upsert:
  """Inserts or replaces entities."""
  entities: List[datastore.Entity]

  def apply(self, client: datastore.Client) -> None:
    _logger.debug('Upsert keys=%s', [entity.key for entity in self.entities])
    client.put_multi(self.entities)

  def buffer(self, transaction: datastore.Transaction) -> None:
    _logger.debug('Buffer upsert keys=%s',
                  [entity.key for entity in self.entities])
    for entity in self.entities:
      transaction.put(entity)


@dataclasses.dataclass(frozen=True)
class Delete:
  """Deletes the entities stored under keys. Missing keys are ignored."""
  keys: List[datastore.Key]

  def apply(self, client: datastore.Client) -> None:
    _logger.debug('Delete keys=%s', self.keys)
    client.delete_multi(self.keys)

  def buffer(self, transaction: datastore.Transaction) -> None:
    _logger.debug('Buffer delete keys=%s', self.keys)
    for key in self.keys:
      transaction.delete(key)
