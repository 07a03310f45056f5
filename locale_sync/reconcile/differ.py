"""Detection of keys missing from a target locale."""

from typing import List, Mapping


def missing_keys(base: Mapping[str, object], target: Mapping[str, object]) -> List[str]:
    """Keys of ``base`` that are absent from ``target``, in base order.

    Only presence counts: a key with an empty or outdated value in the target
    is not missing.
    """
    return [key for key in base if key not in target]
