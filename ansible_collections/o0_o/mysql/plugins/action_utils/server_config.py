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

"""
Render MySQL server option files from a settings mapping.

The settings mapping is ``{section: {option: value}}``. Sections and
options are written in the order given, after a fixed disclaimer
block::

    # ***   This file is managed by Puppet    ***
    # *** Automatically generated, don't edit ***

    [mysqld]
    bind-address = 0.0.0.0

Values are written as-is, without quoting or escaping. Anything that
would change the line structure of the file (line breaks, section
brackets in section names, ``=`` in option names) is rejected.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence

from jinja2 import Environment, StrictUndefined

from ansible.errors import AnsibleActionFail
from ansible.utils.display import Display
from ansible_collections.o0_o.mysql.plugins.action_utils.resource_graph import (
    ResourceGraph,
    ResourceRef,
)

display = Display()

DISCLAIMER = (
    "# ***   This file is managed by Puppet    ***",
    "# *** Automatically generated, don't edit ***",
)

CONFIG_DIR = "/etc/mysql/conf.d"
CONFIG_FILE = "/etc/mysql/my.cnf"
CONFIG_EXTENSION = ".cnf"
RESTART_ACTION = "mysqld-restart"

# Include directory and base option file per ansible_os_family
LAYOUTS = {
    "Debian": {"config_dir": CONFIG_DIR, "config_file": CONFIG_FILE},
    "RedHat": {"config_dir": "/etc/my.cnf.d", "config_file": "/etc/my.cnf"},
    "Suse": {"config_dir": "/etc/my.cnf.d", "config_file": "/etc/my.cnf"},
}
DEFAULT_LAYOUT = "Debian"

_SECTION_FORBIDDEN = ("[", "]", "\n", "\r")
_OPTION_FORBIDDEN = ("=", "\n", "\r")
_OPTION_LEADING_FORBIDDEN = ("#", ";", "[")
_VALUE_FORBIDDEN = ("\n", "\r")
_TITLE_FORBIDDEN = ("/", "\0", "\n", "\r")

_ENVIRONMENT = Environment(
    trim_blocks=True,
    keep_trailing_newline=True,
    autoescape=False,
    undefined=StrictUndefined,
)

_TEMPLATE = _ENVIRONMENT.from_string(
    "{% if disclaimer %}\n"
    "{% for line in disclaimer %}\n"
    "{{ line }}\n"
    "{% endfor %}\n"
    "\n"
    "{% endif %}\n"
    "{% for section, options in settings.items() %}\n"
    "[{{ section }}]\n"
    "{% for key, value in options.items() %}\n"
    "{{ key }} = {{ value }}\n"
    "{% endfor %}\n"
    "\n"
    "{% endfor %}\n"
)


class ValidationError(AnsibleActionFail):
    """The settings mapping or a render option is malformed."""


class PathError(AnsibleActionFail):
    """The title or directory would produce an unsafe file path."""


@dataclass(frozen=True)
class RenderedConfig:
    """Desired state of one option file and its relationships."""

    path: str
    content: str
    require: ResourceRef
    notify: Optional[ResourceRef] = None

    @property
    def resource(self) -> ResourceRef:
        return ResourceRef("File", self.path)


def layout_for(os_family: Optional[str]) -> Dict[str, str]:
    """Return the option file layout for an ``ansible_os_family``."""
    return dict(LAYOUTS.get(os_family or DEFAULT_LAYOUT, LAYOUTS[DEFAULT_LAYOUT]))


def _check_name(
    name: Any,
    what: str,
    forbidden: Sequence[str],
    leading: Sequence[str] = (),
) -> None:
    if not isinstance(name, str):
        raise ValidationError(
            f"{what} names must be strings, got {type(name).__name__}: {name!r}"
        )
    if not name or name != name.strip():
        raise ValidationError(
            f"{what} names must be non-empty without surrounding "
            f"whitespace: {name!r}"
        )
    if any(char in name for char in forbidden):
        raise ValidationError(
            f"{what} name {name!r} contains a forbidden character"
        )
    if name.startswith(tuple(leading)):
        raise ValidationError(
            f"{what} name {name!r} would be read as a comment or section"
        )


def _format_value(section: str, key: str, value: Any) -> str:
    # bool is an int subclass, so it has to be refused first
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(
            f"Value of [{section}] {key} must be a string or number, "
            f"got {type(value).__name__}"
        )

    text = str(value)
    if any(char in text for char in _VALUE_FORBIDDEN):
        raise ValidationError(
            f"Value of [{section}] {key} must not contain line breaks"
        )
    return text


def validate_settings(settings: Any) -> Dict[str, Dict[str, str]]:
    """
    Check the shape of a settings mapping and normalise its values.

    :param settings: Mapping of section names to mappings of option
        names to values
    :returns Dict[str, Dict[str, str]]: A copy of the settings with
        every value converted to text, in the original order
    :raises ValidationError: If the structure, a name or a value is not
        acceptable
    """
    if not isinstance(settings, Mapping):
        raise ValidationError(
            "settings must be a mapping of sections, "
            f"got {type(settings).__name__}"
        )

    validated: Dict[str, Dict[str, str]] = {}
    for section, options in settings.items():
        _check_name(section, "Section", _SECTION_FORBIDDEN)
        if not isinstance(options, Mapping):
            raise ValidationError(
                f"Section [{section}] must be a mapping of options, "
                f"got {type(options).__name__}"
            )

        validated[section] = {}
        for key, value in options.items():
            _check_name(
                key, "Option", _OPTION_FORBIDDEN, _OPTION_LEADING_FORBIDDEN
            )
            validated[section][key] = _format_value(section, key, value)

    return validated


def validate_title(title: Any) -> str:
    """Return the title if it is safe to use as a file base name."""
    if not isinstance(title, str) or not title:
        raise PathError(f"title must be a non-empty string, got {title!r}")
    if title != title.strip():
        raise PathError(
            f"title {title!r} must not have surrounding whitespace"
        )
    if title in (".", ".."):
        raise PathError(f"title {title!r} is not a file name")
    if any(char in title for char in _TITLE_FORBIDDEN):
        raise PathError(
            f"title {title!r} must not contain path separators, NUL or "
            "line breaks"
        )
    return title


def render_content(
    settings: Mapping[str, Mapping[str, str]],
    disclaimer: Sequence[str] = DISCLAIMER,
) -> str:
    """Render already validated settings to option file text."""
    return _TEMPLATE.render(settings=settings, disclaimer=disclaimer)


def render_config(
    title: Any,
    settings: Any,
    notify_service: Any = True,
    config_dir: str = CONFIG_DIR,
    config_file: str = CONFIG_FILE,
    restart_action: str = RESTART_ACTION,
    graph: Optional[ResourceGraph] = None,
) -> RenderedConfig:
    """
    Render the option file for one ``title``.

    :param title: Base name of the file, without extension
    :param settings: Mapping of sections to options
    :param notify_service: Whether a change should notify the restart
        action
    :param str config_dir: Directory holding the rendered file
    :param str config_file: Base option file the rendered file requires
    :param str restart_action: Name of the restart action to notify
    :param Optional[ResourceGraph] graph: Graph to declare the rendered
        file into
    :returns RenderedConfig: Path, content and relationships
    :raises ValidationError: If the settings or flags are malformed
    :raises PathError: If the title, directory or base option file
        path is unsafe

    .. note::
       The base option file is always required, even when no package
       resource manages it, since package management may be disabled.
    """
    title = validate_title(title)
    if not isinstance(notify_service, bool):
        raise ValidationError(
            f"notify_service must be a boolean, got {notify_service!r}"
        )
    if not isinstance(config_dir, str) or not posixpath.isabs(config_dir):
        raise PathError(f"config_dir must be an absolute path: {config_dir!r}")
    if not isinstance(config_file, str) or not posixpath.isabs(config_file):
        raise PathError(
            f"config_file must be an absolute path: {config_file!r}"
        )
    if not isinstance(restart_action, str) or not restart_action.strip():
        raise ValidationError(
            f"restart_action must be a non-empty string, got {restart_action!r}"
        )

    content = render_content(validate_settings(settings))

    rendered = RenderedConfig(
        path=posixpath.join(config_dir, title + CONFIG_EXTENSION),
        content=content,
        require=ResourceRef("File", config_file),
        notify=ResourceRef("Exec", restart_action) if notify_service else None,
    )
    display.vvvv(f"Rendered {rendered.path} ({len(content)} characters)")

    if graph is not None:
        graph.declare(rendered)

    return rendered
