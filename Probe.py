"""
Double hashing probe sequence. Every function here is pure, the same
(key, buckets, attempt) always gives the same slot.
"""
HASH_PRIME_1 = 151
HASH_PRIME_2 = 163


def hash_string(s: str, a: int, m: int) -> int:
    """
    Polynomial string hash reduced modulo m at every step

    Each character is weighted by a ** (len(s) - i + 1) where i is its
    position, the running sum is kept in [0, m).

    Param:
        s: string to hash
        a: prime multiplier
        m: modulus, the table bucket count
    Return: hash of s in [0, m)
    """
    hash = 0
    length = len(s)
    for i, c in enumerate(s):
        hash = (hash + pow(a, length - i + 1, m) * ord(c)) % m
    return hash


def probe_step(key: str, m: int) -> int:
    """
    Distance between two consecutive probes of key, never 0 modulo m

    Param:
        key: key to probe for
        m: bucket count
    Return: step in [1, m)
    """
    step = (hash_string(key, HASH_PRIME_2, m) + 1) % m
    # h2 == m - 1 wraps to 0 and would pin the walk to the home slot
    return step if step else 1


def probe_index(key: str, m: int, attempt: int) -> int:
    """
    Slot to look at for key on a given attempt

    Param:
        key: key to probe for
        m: bucket count, prime
        attempt: attempt number, starting at 0
    Return: slot index in [0, m)
    """
    home = hash_string(key, HASH_PRIME_1, m)
    return (home + attempt * probe_step(key, m)) % m


def probe_sequence(key: str, m: int):
    """
    Generator over the first m slots of key's probe sequence. Since m is
    prime and the step is nonzero, every slot is visited exactly once.

    Param:
        key: key to probe for
        m: bucket count, prime
    Return: generator of slot indices
    """
    home = hash_string(key, HASH_PRIME_1, m)
    step = probe_step(key, m)
    for attempt in range(m):
        yield (home + attempt * step) % m
