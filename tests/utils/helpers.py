"""
Test helper utilities and common functions
"""

import random
import string
import threading
from typing import Callable, Dict, List


def generate_random_string(length: int = 10) -> str:
    """Generate a random string of specified length"""
    return ''.join(random.choices(string.ascii_letters + string.digits, k=length))


def generate_keys(count: int = 1000, prefix: str = "key") -> List[str]:
    """Deterministic keys: key0, key1, ..."""
    return [f"{prefix}{i}" for i in range(count)]


def generate_random_keys(count: int = 1000, seed: int = 1234) -> List[str]:
    """Random but reproducible keys"""
    rng = random.Random(seed)
    alphabet = string.ascii_letters + string.digits
    return [''.join(rng.choices(alphabet, k=16)) for _ in range(count)]


def weighted_ip_nodes(count: int = 10) -> Dict[str, int]:
    """
    Nodes 192.168.1.1 .. 192.168.1.<count> weighted 1 .. count

    Args:
        count: Number of nodes

    Returns:
        Mapping of node address to weight
    """
    return {f"192.168.1.{i + 1}": i + 1 for i in range(count)}


def run_in_threads(targets: List[Callable[[], None]]) -> List[BaseException]:
    """
    Run callables concurrently and collect any exceptions they raise

    Args:
        targets: Zero-argument callables, one thread each

    Returns:
        Exceptions raised by the threads (empty when all succeeded)
    """
    errors: List[BaseException] = []
    errors_lock = threading.Lock()

    def wrap(target):
        def runner():
            try:
                target()
            except BaseException as e:
                with errors_lock:
                    errors.append(e)
        return runner

    threads = [threading.Thread(target=wrap(t)) for t in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return errors
