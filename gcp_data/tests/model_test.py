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

from gcp_data import error
from gcp_data import field
from gcp_data import model
from gcp_data.tests import models


class MetadataTest(unittest.TestCase):

  def test_metadata_present(self):
    columns = ['isbn', 'title', 'pages', 'summary']
    self.assertEqual(columns, models.Book.meta.columns)
    self.assertCountEqual(columns, models.Book.meta.fields.keys())
    self.assertEqual(['isbn'], models.Book.meta.primary_keys)
    self.assertEqual('Book', models.Book.meta.collection)
    self.assertIs(models.Book, models.Book.meta.model_class)

  def test_table_sets_collection(self):
    self.assertEqual('Singers', models.Singer.collection)
    self.assertEqual(['singer_id', 'album_id'], models.Album.primary_keys)

  def test_collection_defaults_to_class_name(self):
    self.assertEqual('DefaultKindModel', models.DefaultKindModel.collection)

  def test_metadata_inheritance(self):
    self.assertEqual(models.Book.meta.collection,
                     models.InheritanceTestModel.meta.collection)
    self.assertEqual(models.Book.meta.primary_keys,
                     models.InheritanceTestModel.meta.primary_keys)
    self.assertEqual(['isbn', 'title', 'pages', 'summary', 'edition'],
                     models.InheritanceTestModel.meta.columns)

  def test_duplicate_field_error(self):
    with self.assertRaises(error.GcpDataError):

      class DuplicateField(models.Book):  # pylint: disable=unused-variable
        isbn = field.Field(field.String(), primary_key=True)

  def test_field_access_on_class(self):
    self.assertIsInstance(models.Book.isbn, field.Field)
    self.assertEqual('isbn', models.Book.isbn.name)
    with self.assertRaises(AttributeError):
      models.Book.not_a_field  # pylint: disable=pointless-statement


class ModelTest(unittest.TestCase):

  def test_init_with_dict_and_kwargs(self):
    book = models.Book({'isbn': '123'}, title='Dune')
    self.assertEqual('123', book.isbn)
    self.assertEqual('Dune', book.title)
    self.assertIsNone(book.pages)

  def test_init_unset_id_is_none(self):
    self.assertIsNone(models.CustomKindEntity().id)

  def test_init_error_on_invalid_fields(self):
    with self.assertRaisesRegex(ValueError, 'not_a_field'):
      models.Book(not_a_field='value')

  def test_init_error_on_invalid_value(self):
    with self.assertRaises(ValueError):
      models.Book(isbn=123)

  def test_set_attr_validates(self):
    book = models.Book(isbn='123')
    book.pages = 10
    self.assertEqual(10, book.pages)
    with self.assertRaises(AttributeError):
      book.pages = 'ten'

  def test_values(self):
    book = models.Book(isbn='123', pages=5)
    self.assertEqual(
        {
            'isbn': '123',
            'title': None,
            'pages': 5,
            'summary': None
        }, book.values)

  def test_equality(self):
    self.assertEqual(
        models.Book(isbn='123', title='a'), models.Book(isbn='123', title='a'))
    self.assertNotEqual(
        models.Book(isbn='123', title='a'), models.Book(isbn='123', title='b'))
    self.assertNotEqual(
        models.Book(isbn='123'), models.InheritanceTestModel(isbn='123'))

  def test_from_record_skips_validation(self):
    book = models.Book.from_record({'isbn': '123', 'pages': 'not an int'})
    self.assertEqual('not an int', book.pages)
    self.assertIsNone(book.title)

  def test_repr(self):
    self.assertEqual("Album(singer_id=1, album_id=2, title=None)",
                     repr(models.Album(singer_id=1, album_id=2)))

  def test_base_model_has_no_metadata(self):
    self.assertNotIn('meta', vars(model.Model))


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
