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
"""Connection settings for Cloud Spanner."""

from typing import Any, Dict, Optional, Union

from google.api_core import client_options as api_client_options
from google.auth import credentials as auth_credentials
from google.cloud import spanner
from google.cloud.spanner_v1 import pool as spanner_pool
from gcp_data import mapping
from gcp_data.spanner import template


class SpannerConnection:
  """Class that handles connecting to a Spanner database."""

  def __init__(
      self,
      instance: str,
      database: str,
      project: Optional[str] = None,
      credentials: Optional[auth_credentials.Credentials] = None,
      pool: Optional[spanner_pool.AbstractSessionPool] = None,
      *,
      client_options: Union[api_client_options.ClientOptions, Dict[Any, Any],
                            None] = None,
  ):
    """Connects to the specified Spanner database."""
    self._instance = instance
    self._database = database
    self._project = project
    self._credentials = credentials
    self._pool = pool
    self._client_options = client_options
    self.connect()

  def connect(self):
    """Establish a new connection to the specified Spanner database."""
    client = spanner.Client(
        project=self._project,
        credentials=self._credentials,
        client_options=self._client_options,
    )
    instance = client.instance(self._instance)
    self.database = instance.database(self._database, pool=self._pool)

  def template(
      self,
      mapping_context: Optional[mapping.MappingContext] = None
  ) -> template.SpannerTemplate:
    """Returns a standalone template that uses this connection's database."""
    return template.SpannerTemplate(
        self.database, mapping_context=mapping_context)
