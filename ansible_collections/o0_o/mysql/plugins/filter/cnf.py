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

from __future__ import annotations

import base64
import traceback
from typing import Any, Dict, List, Mapping, Union

from ansible.errors import AnsibleError, AnsibleFilterError
from ansible.module_utils.common.text.converters import to_text
from ansible_collections.o0_o.mysql.plugins.action_utils.server_config import (
    DISCLAIMER,
    render_content,
    validate_settings,
)

try:
    import jc

    HAS_JC = True
    JC_IMPORT_ERROR = None
except ImportError:
    HAS_JC = False
    JC_IMPORT_ERROR = traceback.format_exc()

DOCUMENTATION = r"""
---
name: mysql_cnf
short_description: Render a settings mapping as MySQL option file text
version_added: "1.0.0"
description:
  - Renders a mapping of sections to options in the same format as the
    o0_o.mysql.server_config module.
  - Sections and options keep the order given.
options:
  _input:
    description:
      - Mapping of section names to mappings of option names to values.
    type: dict
    required: true
  disclaimer:
    description:
      - Whether to start the text with the managed-file disclaimer.
    type: bool
    default: true
notes:
  - I(mysql_cnf_parse) reads option files with the jc C(ini) parser. A
    repeated option in one section (e.g. several C(plugin-load-add) lines)
    keeps only its last value.
  - I(mysql_cnf_parse) strips one pair of surrounding quotes from values,
    so C(x = 'q') parses as C(q). Text rendered by I(mysql_cnf) with
    quoted values does not parse back to the same value.
author:
  - oØ.o (@o0-o)
"""

EXAMPLES = r"""
- name: Render settings inside a larger template
  ansible.builtin.copy:
    dest: /etc/mysql/conf.d/tuning.cnf
    content: "{{ mysql_tuning | o0_o.mysql.mysql_cnf }}"

- name: Read back the current options of an option file
  ansible.builtin.slurp:
    src: /etc/mysql/conf.d/tuning.cnf
  register: tuning_cnf

- name: Show the bind address
  ansible.builtin.debug:
    msg: "{{ (tuning_cnf | o0_o.mysql.mysql_cnf_parse).mysqld['bind-address'] }}"
"""

RETURN = r"""
_value:
  description:
    - Option file text for mysql_cnf.
    - Mapping of sections to options for mysql_cnf_parse.
  type: raw
"""


class FilterModule:
    """Filters for rendering and parsing MySQL option files."""

    def filters(self) -> Dict[str, Any]:
        """Return the filter functions."""
        return {
            "mysql_cnf": self.mysql_cnf,
            "mysql_cnf_parse": self.mysql_cnf_parse,
        }

    def mysql_cnf(
        self, settings: Mapping[str, Any], disclaimer: bool = True
    ) -> str:
        """Render settings as option file text.

        :param settings: Mapping of sections to options
        :param disclaimer: If True, prepend the managed-file disclaimer
        :returns: Option file text
        :raises AnsibleFilterError: If the settings are malformed
        """
        try:
            validated = validate_settings(settings)
        except AnsibleError as e:
            raise AnsibleFilterError(to_text(e), orig_exc=e)

        return render_content(validated, DISCLAIMER if disclaimer else ())

    def mysql_cnf_parse(
        self, data: Union[str, List[str], Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Parse option file text into a settings mapping using jc.

        ``!include`` and ``!includedir`` directives are skipped.
        Repeated options keep their last value and surrounding quotes
        are stripped from values.

        :param data: Option file text, list of lines, or a command or
            slurp result
        :returns: Mapping of sections to options
        :raises AnsibleFilterError: If jc is not available or parsing
            fails
        """
        if not HAS_JC:
            raise AnsibleFilterError(
                "The jc library is required for mysql_cnf_parse. "
                "Install it with: pip install jc",
                orig_exc=JC_IMPORT_ERROR,
            )

        text = self._extract_text(data)
        lines = [
            line for line in text.splitlines()
            if not line.lstrip().startswith("!")
        ]

        try:
            return jc.parse("ini", "\n".join(lines), quiet=True)
        except Exception as e:
            # jc raises various exceptions, catch them all
            raise AnsibleFilterError(f"Error parsing option file: {e}")

    def _extract_text(self, data: Union[str, List[str], Dict[str, Any]]) -> str:
        """Extract option file text from the supported input formats.

        :param data: Input data in various formats
        :returns: Raw text
        """
        if isinstance(data, dict):
            if data.get("encoding") == "base64":
                return to_text(base64.b64decode(data.get("content", "")))
            return data.get("stdout", data.get("content", ""))
        elif isinstance(data, str):
            return data
        elif isinstance(data, list):
            return "\n".join(data)
        elif data is None:
            return ""
        else:
            raise AnsibleFilterError(
                f"mysql_cnf_parse expects text, lines or a result dict, "
                f"got {type(data).__name__}"
            )
