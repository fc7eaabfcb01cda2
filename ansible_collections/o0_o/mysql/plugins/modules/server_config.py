# vim: ts=4:sw=4:sts=4:et:ft=python
# -*- mode: python; tab-width: 4; indent-tabs-mode: nil; -*-
#
# GNU General Public License v3.0+
# SPDX-License-Identifier: GPL-3.0-or-later
# (see COPYING or https://www.gnu.org/licenses/gpl-3.0.txt)
#
# Copyright (c) 2025 oØ.o (@o0-o)
#
# This file is part of the o0_o.mysql Ansible Collection.

from __future__ import absolute_import, division, print_function
__metaclass__ = type

DOCUMENTATION = r'''
---
module: server_config
short_description: Render a MySQL server option file from settings
version_added: "1.0.0"
description:
  - Renders a mapping of option file sections to C(<config_dir>/<title>.cnf)
    on the target host.
  - The file starts with a fixed two-line disclaimer followed by a blank
    line, then one C([section]) block per section with C(key = value)
    lines, each block followed by a blank line.
  - Sections and options are written in the order given. Nothing is
    sorted.
  - Values are written as-is, without quoting or escaping. Values with
    line breaks are rejected.
  - The rendered file always requires the base option file
    (C(File[/etc/mysql/my.cnf]) on Debian) and, unless I(notify_service)
    is false, notifies the restart action (C(Exec[mysqld-restart])).
    Both relationships are reported in the result.
  - The file is written by M(ansible.builtin.copy).
options:
  title:
    description:
      - Base name of the option file, without the C(.cnf) extension.
      - Must not contain C(/) and must not be C(.) or C(..).
    type: str
    required: true
  settings:
    description:
      - Mapping of section names to mappings of option names to values.
      - Values must be strings or numbers.
      - An empty mapping renders the disclaimer only.
    type: dict
    required: true
  notify_service:
    description:
      - Whether a change to the file should notify the restart action.
    type: bool
    default: true
  config_dir:
    description:
      - Directory the option file is written to.
      - Defaults to C(/etc/mysql/conf.d) on Debian and unknown platforms
        and C(/etc/my.cnf.d) on RedHat and Suse.
    type: path
  config_file:
    description:
      - Base option file the rendered file requires.
      - Defaults to C(/etc/mysql/my.cnf) on Debian and unknown platforms
        and C(/etc/my.cnf) on RedHat and Suse.
    type: path
  restart_action:
    description:
      - Name of the restart action notified on change.
    type: str
    default: mysqld-restart
extends_documentation_fragment:
  - action_common_attributes
  - o0_o.mysql.file
attributes:
  check_mode:
    support: full
    description:
      - Check mode is passed through to the copy action.
  diff_mode:
    support: full
    description:
      - Diff output is produced by the copy action.
  async:
    support: none
    description:
      - This module does not support asynchronous execution.
  platform:
    platforms: posix
    description:
      - Only supported on POSIX-compatible systems.

author:
  - oØ.o (@o0-o)
seealso:
  - module: ansible.builtin.copy
notes:
  - This module must be invoked via its action plugin.
  - The layout defaults are chosen from the C(os_family) fact, so gather
    facts first when targeting non-Debian hosts.
'''

EXAMPLES = r'''
- name: Listen on all interfaces
  o0_o.mysql.server_config:
    title: bind
    settings:
      mysqld:
        bind-address: 0.0.0.0
  register: mysql_bind

- name: Restart MySQL when an option file changed
  ansible.builtin.service:
    name: mysql
    state: restarted
  when: mysql_bind.restart_required

- name: Client defaults without notifying the server
  o0_o.mysql.server_config:
    title: client
    notify_service: false
    mode: '0644'
    settings:
      client:
        default-character-set: utf8mb4
      mysql:
        auto-rehash: 'false'
'''

RETURN = r'''
changed:
  description: Whether the file was modified.
  type: bool
  returned: always
path:
  description: Path of the rendered option file.
  type: str
  returned: always
  sample: /etc/mysql/conf.d/bind.cnf
require:
  description: Resource the option file must be applied after.
  type: str
  returned: success
  sample: File[/etc/mysql/my.cnf]
notify:
  description: Action notified when the option file changes.
  type: str
  returned: when notify_service is true
  sample: Exec[mysqld-restart]
relationships:
  description: Declared relationships of the option file.
  type: list
  elements: dict
  returned: success
  sample:
    - kind: require
      source: File[/etc/mysql/conf.d/bind.cnf]
      target: File[/etc/mysql/my.cnf]
    - kind: notify
      source: File[/etc/mysql/conf.d/bind.cnf]
      target: Exec[mysqld-restart]
restart_required:
  description: Whether the file changed and notifies the restart action.
  type: bool
  returned: success
backup_file:
  description: Name of the backup file created, if any.
  type: str
  returned: when backup is true and the file changed
'''

from ansible.module_utils.basic import AnsibleModule


def main():
    argument_spec = dict(
        title=dict(type='str', required=True),
        settings=dict(type='dict', required=True),
        notify_service=dict(type='bool', default=True),
        config_dir=dict(type='path'),
        config_file=dict(type='path'),
        restart_action=dict(type='str', default='mysqld-restart'),
        owner=dict(type='str'),
        group=dict(type='str'),
        mode=dict(type='raw'),
        backup=dict(type='bool', default=False),
        validate=dict(type='str'),
    )

    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True
    )

    module.fail_json(msg="This module must be run via its action plugin.")


if __name__ == '__main__':
    main()
