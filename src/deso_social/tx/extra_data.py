"""
Consensus extra-data key/value pairs.

Some transaction kinds carry fields that validators read from the
transaction's extra-data map rather than from its metadata: repost linkage
on posts and the diamond level/post hash on diamond tips.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..codec.hashes import hex_to_bytes
from ..codec.writer import uvarint_to_bytes
from ..transactions import SendDiamondsRequest, SubmitPostRequest

RECLOUTED_POST_HASH_KEY = "RecloutedPostHash"
IS_QUOTED_RECLOUT_KEY = "IsQuotedReclout"
DIAMOND_LEVEL_KEY = "DiamondLevel"
DIAMOND_POST_HASH_KEY = "DiamondPostHash"


@dataclass(frozen=True)
class ExtraDataKV:
    key: bytes
    value: bytes

    @classmethod
    def of(cls, key: str, value: bytes) -> ExtraDataKV:
        return cls(key.encode("utf-8"), bytes(value))


def extra_data_from_map(extra_data: Optional[Dict[str, str]]) -> List[ExtraDataKV]:
    """Caller-supplied string map, UTF-8 encoded, in the map's iteration order."""
    if not extra_data:
        return []
    return [ExtraDataKV.of(k, v.encode("utf-8")) for k, v in extra_data.items()]


def build_submit_post_consensus_kvs(request: SubmitPostRequest) -> List[ExtraDataKV]:
    """
    Repost linkage for a post.

    Nothing is added unless the request reposts another post. A repost with
    no body text, images or videos is a plain repost (IsQuotedReclout=0);
    anything else is a quote repost (1).
    """
    kvs: List[ExtraDataKV] = []
    if request.reposted_post_hash_hex:
        kvs.append(ExtraDataKV.of(
            RECLOUTED_POST_HASH_KEY,
            hex_to_bytes(request.reposted_post_hash_hex, "RepostedPostHashHex"),
        ))
        is_quoted = 1 if request.body_obj.has_content else 0
        kvs.append(ExtraDataKV.of(IS_QUOTED_RECLOUT_KEY, bytes([is_quoted])))
    return kvs


def build_diamond_consensus_kvs(request: SendDiamondsRequest) -> List[ExtraDataKV]:
    """Diamond level (uvarint) followed by the tipped post's hash."""
    return [
        ExtraDataKV.of(DIAMOND_LEVEL_KEY, uvarint_to_bytes(request.diamond_level)),
        ExtraDataKV.of(
            DIAMOND_POST_HASH_KEY,
            hex_to_bytes(request.diamond_post_hash_hex, "DiamondPostHashHex"),
        ),
    ]


def merge_extra_data(*groups: Iterable[ExtraDataKV]) -> List[ExtraDataKV]:
    """Concatenate KV groups; duplicates are kept."""
    out: List[ExtraDataKV] = []
    for group in groups:
        out.extend(group)
    return out


__all__ = [
    "ExtraDataKV",
    "extra_data_from_map",
    "build_submit_post_consensus_kvs",
    "build_diamond_consensus_kvs",
    "merge_extra_data",
    "RECLOUTED_POST_HASH_KEY",
    "IS_QUOTED_RECLOUT_KEY",
    "DIAMOND_LEVEL_KEY",
    "DIAMOND_POST_HASH_KEY",
]
