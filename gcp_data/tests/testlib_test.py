# Copyright 2020 Google LLC
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
"""Checks the fakes against the client library classes they stand in for."""

import inspect
import logging
import unittest

from absl.testing import parameterized
from google.cloud import datastore
from google.cloud.spanner_v1 import batch as spanner_batch
from google.cloud.spanner_v1 import database as spanner_database
from google.cloud.spanner_v1 import snapshot as spanner_snapshot
from google.cloud.spanner_v1 import transaction as spanner_transaction
from gcp_data.testlib import fake_datastore
from gcp_data.testlib import fake_spanner

# Methods the fakes add for assertions, with no counterpart in the library.
_TEST_HELPERS = frozenset(['write_calls', 'for_models', 'rows', 'apply',
                           'write_batches'])


def _public_names(cls):
  return {name for name in dir(cls) if not name.startswith('_')}


class FakeSurfaceTest(parameterized.TestCase):

  @parameterized.named_parameters(
      ('datastore_client', fake_datastore.FakeDatastoreClient,
       datastore.Client),
      ('datastore_transaction', fake_datastore.FakeTransaction,
       datastore.Transaction),
      ('datastore_query', fake_datastore.FakeQuery, datastore.Query),
      ('spanner_database', fake_spanner.FakeDatabase,
       spanner_database.Database),
      ('spanner_snapshot', fake_spanner.FakeSnapshot,
       spanner_snapshot.Snapshot),
      ('spanner_batch', fake_spanner.FakeBatch, spanner_batch.Batch),
      ('spanner_transaction', fake_spanner.FakeTransaction,
       spanner_transaction.Transaction),
  )
  def test_fake_methods_exist_on_library_class(self, fake_class, real_class):
    missing = _public_names(fake_class) - _TEST_HELPERS - _public_names(
        real_class)
    self.assertEmpty(missing)

  def test_datastore_transaction_has_no_multi_writes(self):
    for name in ('put_multi', 'delete_multi'):
      self.assertFalse(hasattr(datastore.Transaction, name))
      self.assertFalse(hasattr(fake_datastore.FakeTransaction, name))

  @parameterized.named_parameters(
      ('client_get', datastore.Client.get, ['transaction', 'read_time']),
      ('client_get_multi', datastore.Client.get_multi,
       ['transaction', 'read_time']),
      ('client_init', datastore.Client.__init__,
       ['project', 'namespace', 'credentials', 'client_options', 'database']),
      ('transaction_init', datastore.Transaction.__init__,
       ['read_only', 'read_time']),
      ('query_fetch', datastore.Query.fetch, ['read_time']),
      ('snapshot_init', spanner_snapshot.Snapshot.__init__,
       ['read_timestamp', 'multi_use']),
      ('snapshot_read', spanner_snapshot.Snapshot.read,
       ['table', 'columns', 'keyset']),
      ('batch_insert_or_update', spanner_batch.Batch.insert_or_update,
       ['table', 'columns', 'values']),
      ('batch_delete', spanner_batch.Batch.delete, ['table', 'keyset']),
  )
  def test_library_accepts_keyword_arguments(self, method, keywords):
    parameters = inspect.signature(method).parameters
    for keyword in keywords:
      self.assertIn(keyword, parameters)


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
