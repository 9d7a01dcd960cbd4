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
"""Errors raised by the library."""


class GcpDataError(Exception):
  """Base class for all errors raised by gcp_data."""


class DataMappingError(GcpDataError):
  """A class or value can't be mapped to or from a store record."""


class TransactionSemanticsError(GcpDataError):
  """An operation isn't allowed in the current transaction scope."""


class ValidationError(GcpDataError):
  """A value doesn't match the type of the field it's assigned to."""
