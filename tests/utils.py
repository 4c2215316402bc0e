import hashlib
import logging
from pathlib import Path

import libtorrent as lt

logger = logging.getLogger(__name__)


def create_torrent_file(payload_file: str, tracker: str, workspace: str) -> str:
    """Create a torrent file for the payload, bencoded by libtorrent"""
    payload_path = Path(workspace) / payload_file

    fs = lt.file_storage()
    lt.add_files(fs, str(payload_path))

    t = lt.create_torrent(fs)
    t.add_tracker(tracker)
    t.set_creator("bencodec-tests")

    lt.set_piece_hashes(t, str(payload_path.parent))
    torrent_data = lt.bencode(t.generate())

    torrent_path = payload_path.with_suffix(".torrent")
    with open(torrent_path, "wb") as f:
        f.write(torrent_data)

    logger.debug(f"Torrent file: {str(torrent_path)} ({len(torrent_data)} bytes)")

    return str(torrent_path)


def create_payload(workspace: str, size: int = 256 * 1024) -> str:
    """Create test payload file in the workspace"""
    payload_file = Path(workspace) / "payload.dat"
    payload_file.write_bytes(bytes(range(256)) * (size // 256))
    return str(payload_file)


def libtorrent_info_hash(torrent_file: str) -> str:
    """Info hash of a torrent file as computed by libtorrent"""
    info = lt.torrent_info(torrent_file)
    logger.debug(f"  Name: {info.name()}")
    logger.debug(f"  Num pieces: {info.num_pieces()}")
    logger.debug(f"  Info hash: {info.info_hash()}")
    return str(info.info_hash())


def sha1_hex(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()
