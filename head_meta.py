# head_meta.py

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


class MetadataError(ValueError):
    """无法识别的 <meta> 描述。"""


class MetaKind(Enum):
    NAME = 'name'
    PROPERTY = 'property'
    CHARSET = 'charset'


@dataclass(frozen=True)
class SiteMetadataEntry:
    """
    一个 <meta> 标签。
    hid 相同的条目占据同一个位置，后声明的覆盖先声明的。
    """
    kind: MetaKind
    key: str
    value: str = ''
    hid: Optional[str] = None

    @classmethod
    def of_name(cls, key: str, value: str, hid: Optional[str] = None) -> 'SiteMetadataEntry':
        return cls(MetaKind.NAME, key, value, hid)

    @classmethod
    def of_property(cls, key: str, value: str, hid: Optional[str] = None) -> 'SiteMetadataEntry':
        return cls(MetaKind.PROPERTY, key, value, hid)

    @classmethod
    def of_charset(cls, value: str) -> 'SiteMetadataEntry':
        return cls(MetaKind.CHARSET, 'charset', value)

    @classmethod
    def from_tag(cls, tag: Mapping[str, Any]) -> 'SiteMetadataEntry':
        """从框架的字典格式 ({hid, name|property|charset, content}) 构造。"""
        hid = tag.get('hid')
        hid = str(hid) if hid is not None else None
        if 'charset' in tag:
            return cls.of_charset(str(tag['charset']))
        content = tag.get('content')
        content = '' if content is None else str(content)
        if 'name' in tag:
            return cls.of_name(str(tag['name']), content, hid)
        if 'property' in tag:
            return cls.of_property(str(tag['property']), content, hid)
        raise MetadataError(f"meta tag needs one of name/property/charset: {dict(tag)!r}")

    def to_tag(self) -> Dict[str, str]:
        """转换为框架的字典格式。"""
        if self.kind is MetaKind.CHARSET:
            return {'charset': self.value}
        tag = {}
        if self.hid is not None:
            tag['hid'] = self.hid
        tag[self.kind.value] = self.key
        tag['content'] = self.value
        return tag


def entries_from_tags(tags: Iterable[Mapping[str, Any]]) -> Tuple[SiteMetadataEntry, ...]:
    return tuple(SiteMetadataEntry.from_tag(tag) for tag in tags)


def merge_meta(dynamic: Iterable[SiteMetadataEntry],
               static: Iterable[SiteMetadataEntry]) -> Tuple[SiteMetadataEntry, ...]:
    """动态列表在前，静态列表在后；不去重，保持各自的顺序。"""
    return tuple(dynamic) + tuple(static)


def resolve_meta(entries: Iterable[SiteMetadataEntry]) -> List[SiteMetadataEntry]:
    """
    按 hid 做有序 upsert：
    - 有 hid：第一次出现时占位，之后同 hid 的条目替换该位置的值 (后者胜出)。
    - 没有 hid：按顺序追加，允许重复。
    """
    slots: List[SiteMetadataEntry] = []
    positions: Dict[str, int] = {}
    for entry in entries:
        if entry.hid is None:
            slots.append(entry)
        elif entry.hid in positions:
            slots[positions[entry.hid]] = entry
        else:
            positions[entry.hid] = len(slots)
            slots.append(entry)
    return slots
