"""Utility functions for rate limiting, retry logic, and batching."""

import time
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


def parse_iso_datetime(dt_string: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO timestamp (e.g. 2024-01-02T03:04:05Z) into an aware datetime."""
    if not dt_string:
        return None
    return datetime.fromisoformat(dt_string.replace('Z', '+00:00'))


def exponential_backoff(
    max_retries: int = 5,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    exceptions: tuple = (Exception,)
) -> Callable:
    """
    Decorator for exponential backoff retry logic.

    Args:
        max_retries: Maximum number of retry attempts
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries
        exponential_base: Base for exponential calculation
        exceptions: Tuple of exceptions to catch and retry on
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_retries:
                        raise
                    delay = min(base_delay * (exponential_base ** attempt), max_delay)
                    print(f"  Retry {attempt + 1}/{max_retries} after {delay:.1f}s: {str(e)[:100]}")
                    time.sleep(delay)
        return wrapper
    return decorator


def calculate_wait_time(reset_at: str) -> float:
    """
    Calculate seconds to wait until rate limit reset.

    Args:
        reset_at: ISO format datetime string of reset time

    Returns:
        Seconds to wait (minimum 0)
    """
    reset_time = parse_iso_datetime(reset_at)
    now = datetime.now(reset_time.tzinfo)
    wait_seconds = (reset_time - now).total_seconds()
    return max(0, wait_seconds + 5)  # 5 second buffer


def format_rate_limit_info(rate_limit: Dict[str, Any]) -> str:
    """Format rate limit info for display."""
    remaining = rate_limit.get('remaining', '?')
    limit = rate_limit.get('limit', '?')
    reset_at = rate_limit.get('resetAt', '')

    if reset_at:
        try:
            reset_str = parse_iso_datetime(reset_at).strftime('%H:%M:%S')
        except (ValueError, TypeError):
            reset_str = reset_at
    else:
        reset_str = '?'

    return f"Rate limit: {remaining}/{limit} (resets at {reset_str})"


def chunked(items: Iterable[T], size: int) -> Iterator[List[T]]:
    """
    Split items into consecutive lists of at most `size` elements.

    Args:
        items: Items to split
        size: Maximum chunk length

    Raises:
        ValueError: If size is less than 1
    """
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")

    chunk: List[T] = []
    for item in items:
        chunk.append(item)
        if len(chunk) == size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk
