import math

"""
Sizing policy for the hash table. Maps a size index to a prime bucket count.
Prime search is trial division, only ever run on create and resize.
"""
BASE_CAPACITY = 53          # Bucket count floor, capacity at size index 0


def is_prime(n: int) -> bool:
    """
    Checks if n is prime using trial division up to sqrt(n)

    Param:
        n: integer to test
    Return: True if n is prime, False if not
    """
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False

    for d in range(3, math.isqrt(n) + 1, 2):
        if n % d == 0:
            return False
    return True


def next_prime(n: int) -> int:
    """
    Returns the smallest prime >= n

    Param:
        n: starting point of the search
    Return: smallest prime >= n
    """
    while not is_prime(n):
        n += 1
    return n


def capacity_for(size_index: int) -> int:
    """
    Bucket count for a size index. Smallest prime >= BASE_CAPACITY << size_index,
    strictly increasing in size_index.

    Param:
        size_index: non-negative size index
    Pre: size_index >= 0
    Return: prime bucket count >= BASE_CAPACITY
    """
    if size_index < 0:
        raise ValueError("size_index cannot be negative: {}".format(size_index))
    return next_prime(BASE_CAPACITY << size_index)
