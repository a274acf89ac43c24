import numpy as np
from typing import Sequence

def magnitude(vector: Sequence[float]) -> float:
    """
    Euclidean norm of a vector, sqrt(sum(x_i^2)).

    Defined for any length; an empty vector has magnitude 0.0.

    Args:
        vector: Sequence of floats, e.g. the concatenated constraint values.

    Returns:
        float: The magnitude of the vector.
    """
    return float(np.linalg.norm(np.asarray(vector, dtype=float)))
