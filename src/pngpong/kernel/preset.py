from dataclasses import dataclass, replace
from typing import Any, TypeVar

from . import helpers, settings, tree

_SettingT = TypeVar('_SettingT', bound='_DefaultOverride')


@dataclass(frozen=True)
class _DefaultOverride(object):
    def __call__(self: _SettingT, **kwargs: Any) -> _SettingT:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class _PngPreset(settings._PngSetting, _DefaultOverride):

    # static pass through
    drop_offsets = staticmethod(helpers.drop_offsets)
    find = staticmethod(tree.find)
    match = staticmethod(tree.match)
    findall = staticmethod(tree.findall)
    render = staticmethod(tree.render)
    renders = staticmethod(tree.renders)

    # isort: off
    from .resource import (
        read_chunks,
        write_chunks,
    )
    from .container import (
        check_signature,
        read_png,
        write_png,
    )
    # isort: on


png = _PngPreset()
