# scramble/core/digests.py
import hashlib
import importlib.metadata
from typing import Callable, Dict, List

from loguru import logger

DigestFn = Callable[[bytes], str]

DEFAULT_DIGEST = "sha256"

# --- Digest Registry ---
_digest_registry: Dict[str, DigestFn] = {}

def register_digest(name: str):
    """Decorator registering a bytes -> hex string digest under a name."""
    if not name:
        raise ValueError("Digest name must be a non-empty string.")

    def decorator(fn: DigestFn) -> DigestFn:
        if not callable(fn):
            raise TypeError("Digest must be callable")
        if name in _digest_registry:
            logger.warning(f"Digest name conflict: '{name}' already registered. Overwriting.")
        _digest_registry[name] = fn
        logger.trace(f"Registered digest: '{name}'")
        return fn
    return decorator

def load_digests(entry_point_group="scramble.digests"):
    """Discovers and loads digest functions using importlib.metadata entry points."""
    logger.debug(f"Discovering digests using entry point group: '{entry_point_group}'")

    try:
        entry_points = importlib.metadata.entry_points(group=entry_point_group)
    except Exception as e:
        logger.error(f"Error accessing entry points for group '{entry_point_group}': {e}")
        entry_points = []

    loaded_count = 0
    for ep in entry_points:
        try:
            fn = ep.load()
        except Exception as e:
            logger.exception(f"Failed to load digest from entry point {ep.name}: {e}")
            continue
        if not callable(fn):
            logger.warning(f"Entry point {ep.name} did not load a callable digest.")
        elif ep.name in _digest_registry:
            logger.warning(f"Digest name conflict via entry point: '{ep.name}' already registered. Skipping.")
        else:
            _digest_registry[ep.name] = fn
            logger.info(f"Loaded digest '{ep.name}' from entry point")
            loaded_count += 1

    logger.debug(f"Loaded {loaded_count} digests via entry points. Total registered: {len(_digest_registry)}")

def available_digests() -> List[str]:
    return sorted(_digest_registry)

def get_digest(name: str = DEFAULT_DIGEST) -> DigestFn:
    """Returns the digest registered under name; raises KeyError listing the known ones."""
    try:
        return _digest_registry[name]
    except KeyError:
        raise KeyError(f"Unknown digest '{name}'. Available: {', '.join(available_digests())}") from None

# --- Built-in digests (all 32-byte outputs) ---

@register_digest("sha256")
def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()

@register_digest("sha3_256")
def sha3_256_hex(data: bytes) -> str:
    return hashlib.sha3_256(data).hexdigest()

@register_digest("blake2s")
def blake2s_hex(data: bytes) -> str:
    return hashlib.blake2s(data).hexdigest()
