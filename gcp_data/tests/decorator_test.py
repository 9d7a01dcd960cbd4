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
import logging
import unittest
from unittest import mock

from absl.testing import parameterized
from gcp_data import api
from gcp_data import decorator
from gcp_data import error
from gcp_data.datastore import template
from gcp_data.testlib import fake_datastore
from gcp_data.tests import models


class DecoratorTest(parameterized.TestCase):

  @parameterized.parameters(
      (decorator.transactional_read, 'perform_read_only_transaction'),
      (decorator.transactional_write, 'perform_read_write_transaction'),
  )
  @mock.patch('gcp_data.api.default_template')
  def test_transactional_injects_scoped_template(self, decorator_in_test,
                                                 method_name_to_mock,
                                                 mock_default_template):
    mock_scoped = mock.Mock()
    mock_perform = getattr(mock_default_template.return_value,
                           method_name_to_mock)
    mock_perform.side_effect = mock_perform_transaction(mock_scoped)

    @decorator_in_test
    def get_book(book_id, method=None, template=None):
      self.assertEqual(mock_scoped, template)
      self.assertEqual(123, book_id)
      self.assertEqual('library', method)

      return 200

    result = get_book(123, method='library')
    self.assertEqual(200, result)
    mock_perform.assert_called_once()

  @parameterized.parameters(decorator.transactional_read,
                            decorator.transactional_write)
  @mock.patch('gcp_data.api.default_template')
  def test_transactional_uses_given_template(self, decorator_in_test,
                                             mock_default_template):
    mock_scoped = mock.Mock()

    @decorator_in_test
    def get_book(book_id, method=None, template=None):
      self.assertEqual(mock_scoped, template)
      self.assertEqual(123, book_id)
      self.assertEqual('library', method)

      return 200

    result = get_book(123, method='library', template=mock_scoped)

    self.assertEqual(200, result)
    mock_default_template.assert_not_called()

  def test_transactional_keeps_name(self):

    @decorator.transactional_read
    def get_book(template=None):
      del template  # Unused.

    self.assertEqual('get_book', get_book.__name__)

  @parameterized.parameters(decorator.transactional_read,
                            decorator.transactional_write)
  def test_transactional_not_connected(self, decorator_in_test):
    api.hangup()

    @decorator_in_test
    def get_book(template=None):
      del template  # Unused.

    with self.assertRaisesRegex(error.GcpDataError, 'Must connect'):
      get_book()


class DecoratorDatastoreTest(unittest.TestCase):

  def setUp(self):
    super().setUp()
    self.client = fake_datastore.FakeDatastoreClient()
    api.from_template(template.DatastoreTemplate(self.client))
    self.addCleanup(api.hangup)

  def test_write_then_read(self):

    @decorator.transactional_write
    def add_book(isbn, title, template=None):
      template.save(models.Book(isbn=isbn, title=title))

    @decorator.transactional_read
    def get_title(isbn, template=None):
      return template.find_by_id(isbn, models.Book).title

    add_book('123', 'Dune')

    self.assertEqual('Dune', get_title('123'))
    write, read = self.client.transactions
    self.assertFalse(write.read_only)
    self.assertTrue(write.committed)
    self.assertTrue(read.read_only)

  def test_read_rejects_writes(self):

    @decorator.transactional_read
    def add_book(isbn, template=None):
      template.save(models.Book(isbn=isbn))

    with self.assertRaises(error.TransactionSemanticsError):
      add_book('123')
    self.assertEqual({}, self.client.entities)


def mock_perform_transaction(mock_scoped):

  def _mock_perform_transaction(operations, *args, **kwargs):
    return operations(mock_scoped, *args, **kwargs)

  return _mock_perform_transaction


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
