# Copyright 2022 Google LLC
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
"""Tests for field."""

import datetime
from typing import Any

from absl.testing import absltest
from absl.testing import parameterized
from gcp_data import error
from gcp_data import field


class FieldTest(parameterized.TestCase):

  @parameterized.parameters(
      (field.Boolean(), True),
      (field.Integer(), 5),
      (field.Float(), 1.5),
      (field.Float(), 2),
      (field.String(), 'foo'),
      (field.String(3), 'foo'),
      (field.Timestamp(), datetime.datetime.now(tz=datetime.timezone.utc)),
      (field.Bytes(), b'\x00\x01'),
      (field.Array(field.String()), []),
      (field.Array(field.Integer()), [1, 2, 3]),
  )
  def test_field_type_validate_type_ok(
      self,
      field_type: field.FieldType,
      value: Any,
  ):
    field_type.validate_type(value)

  @parameterized.parameters(
      (field.Boolean(), 1),
      (field.Integer(), True),
      (field.Integer(), 1.5),
      (field.Integer(), '1'),
      (field.Float(), False),
      (field.String(), b'foo'),
      (field.String(2), 'foo'),
      (field.Timestamp(), '2020-01-01'),
      (field.Bytes(), 'foo'),
      (field.Array(field.String()), ('foo',)),
      (field.Array(field.Integer()), [1, 'a']),
  )
  def test_field_type_validate_type_error(
      self,
      field_type: field.FieldType,
      value: Any,
  ):
    with self.assertRaises(error.ValidationError):
      field_type.validate_type(value)

  def test_string_length_must_be_positive(self):
    with self.assertRaisesRegex(error.ValidationError, 'must be positive'):
      field.String(0)

  def test_array_of_arrays_not_allowed(self):
    with self.assertRaises(error.GcpDataError):
      field.Array(field.Array(field.String()))

  def test_field_requires_field_type_instance(self):
    with self.assertRaises(error.GcpDataError):
      field.Field(field.String)

  def test_validate_none(self):
    nullable = field.Field(field.String(), nullable=True)
    nullable.validate(None)

    not_nullable = field.Field(field.String())
    with self.assertRaisesRegex(error.ValidationError, 'None set'):
      not_nullable.validate(None)

  def test_field_options(self):
    test_field = field.Field(
        field.Integer(), primary_key=True, nullable=True, indexed=False)
    self.assertIsInstance(test_field.field_type(), field.Integer)
    self.assertTrue(test_field.primary_key())
    self.assertTrue(test_field.nullable())
    self.assertFalse(test_field.indexed())


if __name__ == '__main__':
  absltest.main()
