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
"""Template that maps objects to Cloud Spanner rows."""

import datetime
from typing import List, Optional, Type

from gcp_data import convert
from gcp_data import mapping
from gcp_data import mode as mode_lib
from gcp_data import model
from gcp_data import template
from gcp_data.spanner import keys
from gcp_data.spanner import mutation
from gcp_data.spanner import table_apis

from google.cloud import spanner
from google.cloud.spanner_v1 import database as spanner_database


class SpannerTemplate(template.Template):
  """Reads and writes mapped objects as rows of Cloud Spanner tables.

  Standalone reads each use a single-use snapshot; standalone writes are
  committed as one batch per operation. In a read-write transaction the
  callable may be run more than once if Spanner aborts the transaction, each
  time with a new template.
  """

  def __init__(
      self,
      database: spanner_database.Database,
      converter: Optional[convert.EntityConverter] = None,
      mapping_context: Optional[mapping.MappingContext] = None,
      mutation_factory: Optional[mutation.SpannerMutationFactory] = None,
      template_mode: Optional[mode_lib.TemplateMode] = None):
    mapping_context = mapping_context or mapping.mapping_context()
    converter = converter or convert.EntityConverter(mapping_context)
    super().__init__(converter, keys.SpannerKeyResolver(mapping_context),
                     mapping_context, template_mode)
    self._database = database
    self._mutation_factory = (
        mutation_factory or
        mutation.SpannerMutationFactory(converter, mapping_context))

  @property
  def database(self) -> spanner_database.Database:
    return self._database

  # Reads
  def find_by_id(self, id_, entity_class, timestamp=None):
    """See base class."""
    key = self.get_key_from_id(id_, entity_class)
    results = self._read(entity_class, spanner.KeySet(keys=[list(key)]),
                         timestamp)
    return results[0] if results else None

  def find_all_by_id(self, ids, entity_class, timestamp=None):
    """See base class."""
    keys_to_read = [
        list(self.get_key_from_id(id_, entity_class)) for id_ in ids
    ]
    if not keys_to_read:
      return []
    return self._read(entity_class, spanner.KeySet(keys=keys_to_read),
                      timestamp)

  def find_all(self, entity_class, timestamp=None):
    """See base class."""
    return self._read(entity_class, spanner.KeySet(all_=True), timestamp)

  def _read(
      self, entity_class: Type[model.ModelObject], keyset: spanner.KeySet,
      timestamp: Optional[datetime.datetime]) -> List[model.ModelObject]:
    entity_metadata = self._mapping_context.metadata_for(entity_class)
    columns = entity_metadata.columns
    with self.read_context(timestamp) as read_context:
      rows = table_apis.find(read_context, entity_metadata.collection, columns,
                             keyset)
    return [
        self._converter.read(entity_class, dict(zip(columns, row)))
        for row in rows
    ]

  # Writes that fail on existing or missing rows
  def insert(self, instance: model.Model) -> None:
    """Inserts an object, failing on commit if its row already exists."""
    self.get_key(instance)
    self.apply_mutations(self._mutation_factory.insert([instance]))

  def update(self, instance: model.Model) -> None:
    """Updates an object, failing on commit if its row doesn't exist."""
    self.get_key(instance)
    self.apply_mutations(self._mutation_factory.update([instance]))

  # Store hooks
  def _standalone_read_context(self, timestamp):
    if timestamp is None:
      return self._database.snapshot()
    return self._database.snapshot(read_timestamp=timestamp)

  def _write_mutations(self, mutations):
    with self._database.batch() as batch:
      for spanner_mutation in mutations:
        spanner_mutation.apply(batch)

  def _upsert_mutations(self, instances):
    # Resolving keys first rejects objects without a full primary key.
    for instance in instances:
      self.get_key(instance)
    return self._mutation_factory.upsert(instances)

  def _delete_mutations(self, entity_class, keys_to_delete):
    return [self._mutation_factory.delete(entity_class, keys_to_delete)]

  def _run_read_write(self, operations_):

    def run_in_transaction(transaction):
      return operations_(
          self._with_mode(mode_lib.TemplateMode.read_write(transaction)))

    return self._database.run_in_transaction(run_in_transaction)

  def _run_read_only(self, operations_, timestamp):
    snapshot_options = {'multi_use': True}
    if timestamp is not None:
      snapshot_options['read_timestamp'] = timestamp
    with self._database.snapshot(**snapshot_options) as snapshot:
      return operations_(
          self._with_mode(mode_lib.TemplateMode.read_only(snapshot, timestamp)))

  def _with_mode(self, template_mode):
    return SpannerTemplate(self._database, self._converter,
                           self._mapping_context, self._mutation_factory,
                           template_mode)
