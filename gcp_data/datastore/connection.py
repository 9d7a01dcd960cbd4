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
"""Connection settings for Cloud Datastore."""

from typing import Any, Dict, Optional, Union

from google.api_core import client_options as api_client_options
from google.auth import credentials as auth_credentials
from google.cloud import datastore
from gcp_data import mapping
from gcp_data.datastore import template


class DatastoreConnection:
  """Class that handles connecting to a Datastore database."""

  def __init__(
      self,
      project: Optional[str] = None,
      namespace: Optional[str] = None,
      credentials: Optional[auth_credentials.Credentials] = None,
      *,
      database: Optional[str] = None,
      client_options: Union[api_client_options.ClientOptions, Dict[Any, Any],
                            None] = None,
  ):
    """Connects to the specified Datastore database.

    Args:
      project: The project owning the database. Inferred from the environment
        if not set.
      namespace: The namespace keys are created in.
      credentials: Credentials to authenticate with. Inferred from the
        environment if not set.
      database: The database to use, or None for the default database.
      client_options: Options passed through to the client, e.g. an
        api_endpoint pointing at an emulator.
    """
    self._project = project
    self._namespace = namespace
    self._credentials = credentials
    self._database = database
    self._client_options = client_options
    self.connect()

  def connect(self):
    """Creates a new client for the specified database."""
    self.client = datastore.Client(
        project=self._project,
        namespace=self._namespace,
        credentials=self._credentials,
        client_options=self._client_options,
        database=self._database,
    )

  def template(
      self,
      mapping_context: Optional[mapping.MappingContext] = None
  ) -> template.DatastoreTemplate:
    """Returns a standalone template that uses this connection's client."""
    return template.DatastoreTemplate(
        self.client, mapping_context=mapping_context)
