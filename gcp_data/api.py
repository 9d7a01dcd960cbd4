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
"""Holds the default template used by the transaction decorators."""

from typing import Any, Optional

from gcp_data import error
from gcp_data import template

_template = None  # type: Optional[template.Template]


def from_connection(connection: Any) -> template.Template:
  """Sets the default template to a standalone template on the connection.

  Args:
    connection: A DatastoreConnection or SpannerConnection.

  Returns:
    The new default template.
  """
  return from_template(connection.template())


def from_template(new_template: template.Template) -> template.Template:
  """Sets the default template."""
  global _template
  if new_template.mode.scoped:
    raise error.TransactionSemanticsError(
        'The default template cannot be bound to a transaction')
  _template = new_template
  return _template


def hangup() -> None:
  """Clears the default template."""
  global _template
  _template = None


def default_template() -> template.Template:
  """Returns the default template if it has been set."""
  if not _template:
    raise error.GcpDataError('Must connect before calling APIs')
  return _template
