"""Linear algebra backends injected into basis construction and transforms."""

import numpy as np
import scipy.linalg
from typing import Tuple


class LinearAlgebra:
    """numpy-backed matrix operations."""
    
    name = 'numpy'
    
    def svd(self, a: np.ndarray, full_matrices: bool = False) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return U, S, Vt with singular values in descending order."""
        return np.linalg.svd(a, full_matrices=full_matrices)
    
    def matmul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return np.matmul(a, b)
    
    def kron(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        return np.kron(a, b)
    
    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name})"


class ScipyLinearAlgebra(LinearAlgebra):
    """
    scipy.linalg-backed SVD.
    
    'gesvd' is slower than the default divide-and-conquer 'gesdd' but
    converges on some inputs where 'gesdd' fails.
    """
    
    name = 'scipy'
    
    def __init__(self, lapack_driver: str = 'gesdd'):
        if lapack_driver not in ('gesdd', 'gesvd'):
            raise ValueError(f"Unknown LAPACK driver: {lapack_driver}")
        self.lapack_driver = lapack_driver
    
    def svd(self, a, full_matrices=False):
        return scipy.linalg.svd(
            a, full_matrices=full_matrices, lapack_driver=self.lapack_driver
        )


_BACKENDS = {
    'numpy': LinearAlgebra,
    'scipy': ScipyLinearAlgebra,
}


def get_backend(name: str = 'numpy') -> LinearAlgebra:
    """Create a backend by name ('numpy' or 'scipy')."""
    try:
        return _BACKENDS[name]()
    except KeyError:
        raise ValueError(f"Unknown linear algebra backend: {name}") from None
