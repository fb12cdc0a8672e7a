# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""conch: a Conventional Commits checker.

Validates commit messages against the `Conventional Commits
<https://www.conventionalcommits.org/>`_ grammar and a project policy,
then derives the release impact of a range of commits and the next
semantic version.

Usage::

    from conch import Semver, aggregate_commits, default_config, parse_message

    cfg = default_config()
    commits = [parse_message('feat(api): add pagination'), parse_message('fix: typo')]
    impact = aggregate_commits(commits, cfg.policy)
    print(impact.value)  # minor
"""

from conch.commit_parsing import Classification, Commit, Footer, parse_message
from conch.config import Config, default_config, load_config
from conch.errors import ConchError, MultiError
from conch.impact import aggregate, aggregate_commits, classify, next_version
from conch.policy import Policy, apply_policies, apply_policy
from conch.semver import Semver

__version__ = '0.1.0'

__all__ = [
    'Classification',
    'Commit',
    'ConchError',
    'Config',
    'Footer',
    'MultiError',
    'Policy',
    'Semver',
    '__version__',
    'aggregate',
    'aggregate_commits',
    'apply_policies',
    'apply_policy',
    'classify',
    'default_config',
    'load_config',
    'next_version',
    'parse_message',
]
