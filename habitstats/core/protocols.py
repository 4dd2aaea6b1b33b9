"""
Core protocols for habitstats.

Structural interface that regression backends satisfy. Protocol (rather
than ABC) keeps backends plain classes with no shared base.
"""

from typing import Protocol, TypeVar, runtime_checkable

from habitstats.core.result import Result

P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a validated design and produces a parameter payload
    wrapped in a Result. Backends are stateless apart from construction
    arguments, which makes them easy to test and swap.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_normal_equations', 'cpu_qr'
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.

        Raises:
            NumericalError: If numerical issues prevent a solution
        """
        ...
