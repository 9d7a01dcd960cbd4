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
"""Transaction decorators."""

import functools
from typing import Callable, TypeVar

from gcp_data import api

T = TypeVar('T')


def transactional_read(func: Callable[..., T]) -> Callable[..., T]:
  """Injects a template bound to a read-only transaction as keyword argument.

    For example:

    @transactional_read
    def get_book(isbn, template=None):
      return template.find_by_id(isbn, Book)

    Client would then call this by skipping the 'template' argument:
    get_book('123')

    To call a decorated function if you already have a template:

    @transactional_read
    def list_books(isbns, template=None):
      return [get_book(isbn, template=template) for isbn in isbns]

    list_books would call get_book with the same transaction.

  Args:
    func: Callable which will be called with a template bound to a read-only
      transaction opened on the default template, plus its original arguments.
      Decorated `func` can also be passed an optional 'template' kwarg to use
      a given template instead.

  Returns:
    decorated function
  """
  run_lambda = lambda: api.default_template().perform_read_only_transaction
  return _transactional(run_lambda, func)


def transactional_write(func: Callable[..., T]) -> Callable[..., T]:
  """Injects a template bound to a read-write transaction as keyword argument.

    For example:

    @transactional_write
    def rename_book(isbn, title, template=None):
      book = template.find_by_id(isbn, Book)
      book.title = title
      template.save(book)

  Args:
    func: Callable which will be called with a template bound to a read-write
      transaction opened on the default template, plus its original arguments.
      Decorated `func` can also be passed an optional 'template' kwarg to use
      a given template instead.

  Returns:
    decorated function
  """
  run_lambda = lambda: api.default_template().perform_read_write_transaction
  return _transactional(run_lambda, func)


def _transactional(run_lambda: Callable[[], Callable[..., T]],
                   func: Callable[..., T]) -> Callable[..., T]:
  """Returns decorated function."""

  @functools.wraps(func)
  def wrapper(*args, **kwargs) -> T:
    if 'template' in kwargs:
      return func(*args, **kwargs)

    perform_transaction = run_lambda()
    return perform_transaction(
        lambda template: func(*args, template=template, **kwargs))

  return wrapper
