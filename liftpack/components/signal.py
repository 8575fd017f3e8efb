"""Signal components: Samples, Signal, Coefficients, Reconstruction."""

from pydantic import BaseModel, Field

from liftpack.core.arena import TensorRef


class Component(BaseModel):
    """Base class for all ECS components."""

    model_config = {"arbitrary_types_allowed": True}


class Samples(Component):
    """Raw real-valued samples, as read from a price history file.

    Attributes:
        data: TensorRef to samples (N,) float64, oldest first
        source: Where the samples came from (file name or generator)
        field: Price column that was extracted, if any
    """

    data: TensorRef
    source: str = Field(default="")
    field: str | None = None


class Signal(Component):
    """Transform input: a 1-D integer or real vector.

    Attributes:
        data: TensorRef to the signal (N,) int64 or float64
        scale: Factor applied by the quantizer (1 if not quantized)
    """

    data: TensorRef
    scale: int = Field(default=1, ge=1)


class Coefficients(Component):
    """Result of an in-place transform of a whole signal.

    Attributes:
        data: TensorRef to the transformed vector
        method: Transform name ('delta', 'haar', 'line', ...)
    """

    data: TensorRef
    method: str


class Reconstruction(Component):
    """Signal rebuilt by an inverse transform.

    Attributes:
        data: TensorRef to the reconstructed vector
    """

    data: TensorRef
