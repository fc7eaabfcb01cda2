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


class ModuleDocFragment:
    DOCUMENTATION = """
    options:
      owner:
        description:
          - Name of the user that should own the option file.
        type: str
      group:
        description:
          - Name of the group that should own the option file.
        type: str
      mode:
        description:
          - Mode to set on the option file, e.g. C(0644).
          - Passed unchanged to M(ansible.builtin.copy).
        type: raw
      backup:
        description:
          - Create a backup copy of the option file before replacing it.
        type: bool
        default: false
      validate:
        description:
          - Validation command to run against the temporary file before
            replacing the option file.
          - The command must contain C(%s), which is replaced with the path
            to the temporary file.
        type: str
    notes:
      - Writes are delegated to M(ansible.builtin.copy), which replaces the
        file atomically.
    """
