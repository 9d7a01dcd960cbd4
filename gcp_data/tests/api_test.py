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
from google.cloud import datastore
from google.cloud import spanner

from gcp_data import api
from gcp_data import error
from gcp_data import mode
from gcp_data.datastore import connection as datastore_connection
from gcp_data.datastore import template as datastore_template
from gcp_data.spanner import connection as spanner_connection
from gcp_data.spanner import template as spanner_template
from gcp_data.testlib import fake_datastore


class ConnectionTest(parameterized.TestCase):

  @mock.patch.object(spanner, 'Client', autospec=True, spec_set=True)
  def test_spanner_connection_args(self, client):
    client.return_value.instance.return_value.database.return_value = (
        'fake-database')
    connection = spanner_connection.SpannerConnection(
        instance='some-instance',
        database='some-database',
        project='some-project',
        credentials='fake-credentials',
        pool='fake-pool',
        client_options=dict(fake='options'),
    )
    self.assertEqual('fake-database', connection.database)
    self.assertSequenceEqual(
        (
            mock.call(
                project='some-project',
                credentials='fake-credentials',
                client_options=dict(fake='options'),
            ),
            mock.call().instance('some-instance'),
            mock.call().instance().database(
                'some-database',
                pool='fake-pool',
            ),
        ),
        client.mock_calls,
    )

  @mock.patch.object(spanner, 'Client', autospec=True, spec_set=True)
  def test_spanner_connection_template(self, client):
    client.return_value.instance.return_value.database.return_value = (
        'fake-database')
    connection = spanner_connection.SpannerConnection('i', 'd')

    connection_template = connection.template()

    self.assertIsInstance(connection_template, spanner_template.SpannerTemplate)
    self.assertEqual('fake-database', connection_template.database)
    self.assertFalse(connection_template.mode.scoped)

  @mock.patch.object(datastore, 'Client', autospec=True, spec_set=True)
  def test_datastore_connection_args(self, client):
    connection = datastore_connection.DatastoreConnection(
        project='some-project',
        namespace='some-namespace',
        credentials='fake-credentials',
        database='some-database',
        client_options=dict(api_endpoint='localhost:8081'),
    )
    self.assertIs(client.return_value, connection.client)
    client.assert_called_once_with(
        project='some-project',
        namespace='some-namespace',
        credentials='fake-credentials',
        client_options=dict(api_endpoint='localhost:8081'),
        database='some-database',
    )

  @mock.patch.object(datastore, 'Client', autospec=True, spec_set=True)
  def test_datastore_connection_template(self, client):
    connection = datastore_connection.DatastoreConnection()
    connection_template = connection.template()
    self.assertIsInstance(connection_template,
                          datastore_template.DatastoreTemplate)
    self.assertIs(client.return_value, connection_template.client)


class ApiTest(parameterized.TestCase):

  def setUp(self):
    super().setUp()
    self.addCleanup(api.hangup)

  def test_api_error_when_not_connected(self):
    api.hangup()
    with self.assertRaisesRegex(error.GcpDataError, 'Must connect'):
      api.default_template()

  @mock.patch('google.cloud.datastore.Client')
  def test_from_connection(self, client):
    del client  # Unused.
    connection = datastore_connection.DatastoreConnection()

    default = api.from_connection(connection)

    self.assertIs(default, api.default_template())
    self.assertIs(connection.client, default.client)

    api.hangup()
    with self.assertRaises(error.GcpDataError):
      api.default_template()

  def test_from_template(self):
    default = datastore_template.DatastoreTemplate(
        fake_datastore.FakeDatastoreClient())
    self.assertIs(default, api.from_template(default))
    self.assertIs(default, api.default_template())

  @parameterized.parameters(
      mode.TemplateMode.read_write(mock.sentinel.transaction),
      mode.TemplateMode.read_only(mock.sentinel.transaction),
  )
  def test_from_template_rejects_scoped(self, template_mode):
    scoped = datastore_template.DatastoreTemplate(
        fake_datastore.FakeDatastoreClient(), template_mode=template_mode)
    with self.assertRaises(error.TransactionSemanticsError):
      api.from_template(scoped)
    with self.assertRaises(error.GcpDataError):
      api.default_template()


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
