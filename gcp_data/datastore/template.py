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
"""Template that maps objects to Cloud Datastore entities."""

import contextlib
import datetime
import logging
from typing import Any, Dict, Iterable, List, Optional, Type

from gcp_data import mapping
from gcp_data import mode as mode_lib
from gcp_data import model
from gcp_data import template
from gcp_data.datastore import convert
from gcp_data.datastore import keys
from gcp_data.datastore import mutation

from google.cloud import datastore

_logger = logging.getLogger(__name__)


class DatastoreReadContext(object):
  """Issues reads against the client, in a transaction or at a time."""

  def __init__(self,
               client: datastore.Client,
               transaction: Optional[datastore.Transaction] = None,
               read_time: Optional[datetime.datetime] = None):
    self._client = client
    self._options = {}  # type: Dict[str, Any]
    if transaction is not None:
      self._options['transaction'] = transaction
    if read_time is not None:
      self._options['read_time'] = read_time

  def get(self, key: datastore.Key) -> Optional[datastore.Entity]:
    _logger.debug('Get key=%s', key)
    return self._client.get(key, **self._options)

  def get_multi(self, keys_: List[datastore.Key]) -> List[datastore.Entity]:
    _logger.debug('Get keys=%s', keys_)
    return self._client.get_multi(keys_, **self._options)

  def run(self, query: datastore.Query) -> List[datastore.Entity]:
    """Runs query and returns every result.

    Queries pick up the client's current transaction on their own, so only
    the read time is passed along.
    """
    _logger.debug('Run query kind=%s', query.kind)
    fetch_options = {}
    if 'read_time' in self._options:
      fetch_options['read_time'] = self._options['read_time']
    return list(query.fetch(**fetch_options))


class DatastoreTemplate(template.Template):
  """Reads and writes mapped objects as Cloud Datastore entities.

  Each object becomes one root entity whose kind is the model's `__kind__`
  and whose key id or name is the value of its id field.
  """

  def __init__(self,
               client: datastore.Client,
               converter: Optional[convert.DatastoreEntityConverter] = None,
               mapping_context: Optional[mapping.MappingContext] = None,
               template_mode: Optional[mode_lib.TemplateMode] = None):
    mapping_context = mapping_context or mapping.mapping_context()
    super().__init__(
        converter or convert.DatastoreEntityConverter(mapping_context),
        keys.DatastoreKeyResolver(client, mapping_context), mapping_context,
        template_mode)
    self._client = client

  @property
  def client(self) -> datastore.Client:
    return self._client

  # Reads
  def find_by_id(self, id_, entity_class, timestamp=None):
    """See base class."""
    key = self.get_key_from_id(id_, entity_class)
    with self.read_context(timestamp) as reader:
      entity = reader.get(key)
    if entity is None:
      return None
    return self._converter.read(entity_class, entity)

  def find_all_by_id(self, ids, entity_class, timestamp=None):
    """See base class."""
    keys_to_get = [self.get_key_from_id(id_, entity_class) for id_ in ids]
    if not keys_to_get:
      return []
    with self.read_context(timestamp) as reader:
      entities = reader.get_multi(keys_to_get)
    return self._convert_entities(entity_class, entities)

  def find_all(self, entity_class, timestamp=None):
    """See base class."""
    query = self._client.query(
        kind=self._mapping_context.collection_name_for(entity_class))
    with self.read_context(timestamp) as reader:
      entities = reader.run(query)
    return self._convert_entities(entity_class, entities)

  def _convert_entities(
      self, entity_class: Type[model.ModelObject],
      entities: Iterable[Optional[datastore.Entity]]
  ) -> List[model.ModelObject]:
    return [
        self._converter.read(entity_class, entity)
        for entity in entities
        if entity is not None
    ]

  # Store hooks
  def _standalone_read_context(self, timestamp):
    return contextlib.nullcontext(
        DatastoreReadContext(self._client, read_time=timestamp))

  def _transaction_read_context(self, handle):
    return DatastoreReadContext(self._client, transaction=handle)

  def _write_mutations(self, mutations):
    for datastore_mutation in mutations:
      datastore_mutation.apply(self._client)

  def _buffer_mutations(self, handle, mutations):
    for datastore_mutation in mutations:
      datastore_mutation.buffer(handle)

  def _upsert_mutations(self, instances):
    entities = []
    for instance in instances:
      entity = datastore.Entity(key=self.get_key(instance))
      self._converter.write(instance, entity)
      entities.append(entity)
    return [mutation.Upsert(entities)]

  def _delete_mutations(self, entity_class, keys_to_delete):
    del entity_class  # Unused.
    return [mutation.Delete(list(keys_to_delete))]

  def _run_read_write(self, operations_):
    with self._client.transaction() as transaction:
      return operations_(
          self._with_mode(mode_lib.TemplateMode.read_write(transaction)))

  def _run_read_only(self, operations_, timestamp):
    transaction_options = {'read_only': True}
    if timestamp is not None:
      transaction_options['read_time'] = timestamp
    with self._client.transaction(**transaction_options) as transaction:
      return operations_(
          self._with_mode(
              mode_lib.TemplateMode.read_only(transaction, timestamp)))

  def _with_mode(self, template_mode):
    return DatastoreTemplate(self._client, self._converter,
                             self._mapping_context, template_mode)
