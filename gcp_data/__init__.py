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

"""Sets up shortcuts for imports from the library."""
import logging

from gcp_data import api
from gcp_data import convert
from gcp_data import decorator
from gcp_data import error
from gcp_data import field
from gcp_data import mapping
from gcp_data import mode
from gcp_data import model
from gcp_data import operations
from gcp_data import template
from gcp_data.datastore import connection as datastore_connection
from gcp_data.datastore import template as datastore_template
from gcp_data.spanner import connection as spanner_connection
from gcp_data.spanner import template as spanner_template

# add NullHandler to root-module logger so that individual modules
# won't have to.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# pylint: disable=invalid-name
GcpDataError = error.GcpDataError
DataMappingError = error.DataMappingError
TransactionSemanticsError = error.TransactionSemanticsError
ValidationError = error.ValidationError

DatastoreConnection = datastore_connection.DatastoreConnection
DatastoreTemplate = datastore_template.DatastoreTemplate
SpannerConnection = spanner_connection.SpannerConnection
SpannerTemplate = spanner_template.SpannerTemplate

DataOperations = operations.DataOperations
Template = template.Template
TemplateMode = mode.TemplateMode
Scope = mode.Scope

EntityConverter = convert.EntityConverter
MappingContext = mapping.MappingContext
mapping_context = mapping.mapping_context

from_connection = api.from_connection
from_template = api.from_template
hangup = api.hangup
default_template = api.default_template

Model = model.Model

Array = field.Array
Boolean = field.Boolean
Bytes = field.Bytes
Field = field.Field
Float = field.Float
Integer = field.Integer
String = field.String
Timestamp = field.Timestamp

transactional_read = decorator.transactional_read
transactional_write = decorator.transactional_write
