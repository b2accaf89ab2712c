"""
Matrix Mutations Architecture
=============================

This module defines how the analysis stages are structured and applied.

- :class:`~container_models.matrix.MatrixContainer` holds one stage's matrix.
- :class:`MatrixMutation` is an abstract interface for turning a MatrixContainer
  into a new one.
- Concrete mutations live in the ``mutations`` folder, grouped per concern.
- The array work itself is delegated to a
  :class:`~container_models.protocols.MatrixOperations` implementation; stateless
  helpers such as kernel construction live in the `computations` folder.

High-level Design
-----------------

                        +---------------------------------+
                        |         MatrixContainer         |
                        |---------------------------------|
                        | data        : MatrixData        |
                        | value_range : ValueRange | None |
                        +---------------+-----------------+
                                        |
                                        v
                    +-------------------+----------------------+
                    |              <<abstract>>                |
                    |             MatrixMutation               |
                    |------------------------------------------|
                    | + apply_on_matrix(T) -> T                |
                    | + skip_predicate: bool                   |
                    +--------------------+---------------------+
                                         ^
                                         |
        +---------------------+----------+------------+-------------------+
        |                     |                       |                   |
+-------+--------+  +---------+---------+  +----------+--------+  +-------+-------+
|   Normalize    |  |   GaussianBlur    |  |   OtsuThreshold   |  |    Invert     |
|----------------|  |-------------------|  |-------------------|  |---------------|
| lower : float  |  | kernel_size : int |  |                   |  |               |
| upper : float  |  | sigma : float     |  |                   |  |               |
| as_uint8: bool |  | border : Border.. |  |                   |  |               |
+----------------+  +-------------------+  +-------------------+  +---------------+


Example
-------

    from container_models import MatrixContainer
    from returns.pipeline import flow
    from returns.pointfree import bind
    from mutations import GaussianBlur, Normalize, OtsuThreshold
    from utils.constants import BorderMode

    matrix = MatrixContainer(data=[[0.0, 1.0], [2.0, 3.0]])

    result = flow(
        matrix,
        Normalize(lower=0, upper=255, as_uint8=True),
        bind(GaussianBlur(kernel_size=3, border=BorderMode.REFLECT)),
        bind(OtsuThreshold()),
    )
"""

from abc import ABC, abstractmethod

from returns.result import safe

from computations.operations import DEFAULT_OPERATIONS
from container_models import MatrixContainer
from container_models.protocols import MatrixOperations


class MatrixMutation(ABC):
    """
    Represents a single stage applied to a :class:`~container_models.matrix.MatrixContainer`.

    After one `MatrixMutation`, the resulting `MatrixContainer` must be valid
    input for another mutation. This enables safe chaining in pipelines.

    All parameters required for the mutation should be provided via
    the constructor. A mutation never edits its input, it returns a new container.
    """

    def __init__(self, operations: MatrixOperations = DEFAULT_OPERATIONS) -> None:
        self.operations = operations

    @property
    def skip_predicate(self) -> bool:
        """
        Determines whether this mutation should be skipped.

        :return bool:
            - `True`  → skip `apply_on_matrix`
            - `False` → apply the mutation
        """
        return False

    @safe
    def __call__(self, matrix: MatrixContainer) -> MatrixContainer:
        """
        Callable interface used by pipelines (e.g. `flow(...)` from
        the `returns` library).

        If `skip_predicate` is `True`, the input `MatrixContainer` is returned
        unchanged. Otherwise, `apply_on_matrix` is executed. Any exception raised
        by the mutation ends up in the returned `Failure`.

        :param matrix:
            The `MatrixContainer` to transform.
        :return MatrixContainer:
            The transformed matrix, wrapped in a `Result`.
        """
        if self.skip_predicate:
            return matrix
        return self.apply_on_matrix(matrix)

    @abstractmethod
    def apply_on_matrix(self, matrix: MatrixContainer) -> MatrixContainer:
        """
        Applies the mutation to the given `MatrixContainer`.

        This method must be implemented by concrete mutations and is
        called internally by `__call__` to support pipeline composition.

        :param matrix:
            The input `MatrixContainer`.
        :return MatrixContainer:
            A new `MatrixContainer`.
        """
