"""
Core protocols for curvefit.

Backends are described structurally (Protocol) rather than by
inheritance, so a least-squares backend only has to provide a name and
a solve() method to be usable by the regression engine.
"""

from typing import Protocol, TypeVar, runtime_checkable

from curvefit.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)  # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a design (matrix + response) and produces a
    parameter payload wrapped in a Result. Backends are stateless apart
    from construction-time configuration (device, precision), which makes
    them safe to reuse across fits and across threads.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_normal', 'cpu_qr', 'gpu_normal_fp64'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the least-squares computation.

        Raises:
            SingularMatrixError: If the system has no unique solution
        """
        ...
