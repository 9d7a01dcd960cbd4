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
"""gcp_data setup file."""
from setuptools import setup

_TESTS_REQUIRE = ['absl-py >= 1.0']

setup(
    name='gcp-data',
    version='0.1.0',
    description='Object mapping and transaction templates for Datastore and '
    'Spanner',
    maintainer='Python GCP data developers',
    packages=[
        'gcp_data',
        'gcp_data.datastore',
        'gcp_data.spanner',
        'gcp_data.testlib',
    ],
    include_package_data=True,
    python_requires='~=3.8',
    install_requires=[
        'google-api-core',
        'google-auth',
        'google-cloud-datastore >= 2.20, <3',
        'google-cloud-spanner >= 3, <4',
    ],
    tests_require=_TESTS_REQUIRE,
    extras_require={'tests': _TESTS_REQUIRE},
)
