"""
Pipeline composer - runs text through an ordered chain of ciphers.

Encryption applies the steps in order, each stage feeding the next.
Decryption walks the same step list backwards and applies each engine's
inverse with the key bound to that step, so for any valid pipeline
decrypt(encrypt(x)) == x.

Every algorithm is resolved and every key validated before the first
transform runs. Any failure aborts the whole run; there is no partial
output.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from cipherchain.core.exceptions import CipherChainError, EngineNotFoundError, KeyValidationError
from cipherchain.models.schemas import CipherType, OperationMode
from cipherchain.services.engines.base import CipherEngine
from cipherchain.services.engines.keys import KeyValue
from cipherchain.services.engines.registry import EngineRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineStep:
    """One (algorithm, key) step. Order within a pipeline is significant."""

    algorithm: CipherType | str
    key: KeyValue | Any


@dataclass(frozen=True)
class StageResult:
    """Input and output of one executed stage."""

    step_index: int
    algorithm: CipherType
    input: str
    output: str


@dataclass
class PipelineRun:
    """Result of running a pipeline."""

    mode: OperationMode
    input: str
    output: str

    # Stages in the order they were executed
    stages: list[StageResult] = field(default_factory=list)


@dataclass(frozen=True)
class BoundStep:
    """A step whose engine is resolved and whose key is validated."""

    index: int
    engine: CipherEngine
    key: KeyValue


StepLike = PipelineStep | tuple[CipherType | str, Any]


class PipelineComposer:
    """
    Composes registry engines into a pipeline.

    Holds no per-run state, so one instance may serve concurrent callers.
    """

    def __init__(self, registry: EngineRegistry | None = None):
        self.registry = registry or EngineRegistry()

    def compose(
        self,
        text: str,
        steps: Iterable[StepLike],
        mode: OperationMode | str = OperationMode.ENCRYPT,
    ) -> PipelineRun:
        """
        Run text through the pipeline.

        Args:
            text: Input text (plaintext or ciphertext depending on mode)
            steps: Ordered pipeline steps, in encryption order
            mode: ENCRYPT walks the steps forwards, DECRYPT backwards

        Returns:
            PipelineRun with the final output and every stage

        Raises:
            EngineNotFoundError: If a step names an unknown algorithm
            KeyValidationError: If a step's key fails its validator
            CipherChainError: If a transform fails; details carry the
                failing step_index and algorithm
        """
        mode = OperationMode(mode)
        bound = self.bind([self._as_step(step) for step in steps])

        ordered = bound if mode == OperationMode.ENCRYPT else list(reversed(bound))
        logger.debug("Running %s pipeline with %d steps", mode.value, len(ordered))

        stages: list[StageResult] = []
        current = text

        for step in ordered:
            output = self._apply(step, current, mode)
            stages.append(StageResult(
                step_index=step.index,
                algorithm=step.engine.cipher_type,
                input=current,
                output=output,
            ))
            current = output

        return PipelineRun(mode=mode, input=text, output=current, stages=stages)

    def bind(self, steps: Sequence[PipelineStep]) -> list[BoundStep]:
        """
        Resolve engines and validate keys for every step up front.

        All lookups happen before any key is validated, so an unknown
        algorithm anywhere in the list is reported first.
        """
        engines: list[CipherEngine] = []
        for index, step in enumerate(steps):
            engine = self.registry.get_engine(step.algorithm)
            if engine is None:
                name = step.algorithm.value if isinstance(step.algorithm, CipherType) else str(step.algorithm)
                logger.warning("Unknown algorithm '%s' at step %d", name, index)
                raise EngineNotFoundError(name, step_index=index)
            engines.append(engine)

        bound: list[BoundStep] = []
        for index, (step, engine) in enumerate(zip(steps, engines)):
            if not engine.validate_key(step.key):
                logger.warning(
                    "Rejected key for %s at step %d", engine.cipher_type.value, index
                )
                raise KeyValidationError(engine.cipher_type.value, step_index=index)
            bound.append(BoundStep(index=index, engine=engine, key=engine.parse_key(step.key)))

        return bound

    def _apply(self, step: BoundStep, text: str, mode: OperationMode) -> str:
        operation = step.engine.encrypt if mode == OperationMode.ENCRYPT else step.engine.decrypt
        try:
            return operation(text, step.key)
        except CipherChainError as e:
            e.details.setdefault("step_index", step.index)
            e.details.setdefault("algorithm", step.engine.cipher_type.value)
            logger.warning(
                "%s step %d (%s) failed: %s",
                mode.value.capitalize(),
                step.index,
                step.engine.cipher_type.value,
                e.message,
            )
            raise

    @staticmethod
    def _as_step(step: StepLike) -> PipelineStep:
        if isinstance(step, PipelineStep):
            return step
        algorithm, key = step
        return PipelineStep(algorithm=algorithm, key=key)


def run_pipeline(
    text: str,
    steps: Iterable[StepLike],
    mode: OperationMode | str = OperationMode.ENCRYPT,
) -> str:
    """Run a pipeline and return only its final output."""
    return PipelineComposer().compose(text, steps, mode).output
