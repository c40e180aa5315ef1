"""Producer/consumer pipeline: extract on a worker thread, transform and write here."""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from mdprompt.errors import MdPromptError, ProducerFault
from mdprompt.models import Record
from mdprompt.pipeline.channel import Channel, ChannelCancelled, select
from mdprompt.protocols import Ingester, Transformer, Writer

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """Lifecycle of a coordinator run."""

    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


@dataclass
class PipelineResult:
    """Outcome of a successful run."""

    written: list[Path] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.written)


class Coordinator:
    """Runs one producer thread and drains it on the calling thread.

    The producer walks the source with the ingester and hands records over
    an unbuffered data channel, so it never gets more than one record ahead
    of the consumer. Anything the producer raises is reported once on a
    single-slot error channel. The consumer transforms and writes each
    record, and stops at the first error from either side. When it stops
    early it cancels the data channel so the producer is released and can be
    joined.
    """

    def __init__(self, ingester: Ingester, transformer: Transformer, writer: Writer):
        self.ingester = ingester
        self.transformer = transformer
        self.writer = writer
        self.state = PipelineState.RUNNING

    def run(self, source: Path | str) -> PipelineResult:
        """Process every record in the source.

        Raises:
            MdPromptError: The first fatal error from the producer or consumer
        """
        cond = threading.Condition()
        data: Channel[Record] = Channel(0, cond)
        errors: Channel[MdPromptError] = Channel(1, cond)

        producer = threading.Thread(
            target=self._produce,
            args=(Path(source), data, errors),
            name="mdprompt-producer",
            daemon=True,
        )
        self.state = PipelineState.RUNNING
        result = PipelineResult()
        producer.start()
        try:
            self._drain(data, errors, result)
        except BaseException:
            data.cancel()
            raise
        finally:
            producer.join()
        return result

    def _produce(self, source: Path, data: Channel[Record], errors: Channel[MdPromptError]) -> None:
        records = None
        try:
            records = self.ingester.ingest(source)
            for record in records:
                data.send(record)
        except ChannelCancelled:
            logger.debug("Producer stopped: consumer aborted")
        except MdPromptError as e:
            self._report(data, errors, e)
        except BaseException as e:
            self._report(data, errors, ProducerFault(e))
        finally:
            close = getattr(records, "close", None)
            if close is not None:
                close()
            data.close()
            errors.close()

    @staticmethod
    def _report(
        data: Channel[Record],
        errors: Channel[MdPromptError],
        error: MdPromptError,
    ) -> None:
        # The consumer only ever acts on the first error.
        if data.cancelled:
            logger.debug(f"Producer error after consumer abort: {error}")
            return
        if not errors.offer(error):
            logger.error(f"Dropped producer error: {error}")

    def _drain(
        self,
        data: Channel[Record],
        errors: Channel[MdPromptError],
        result: PipelineResult,
    ) -> None:
        sources: list[Channel] = [errors, data]
        while sources:
            index, item, ok = select(*sources)
            channel = sources[index]

            if not ok:
                sources.remove(channel)
                self.state = PipelineState.DRAINING if sources else PipelineState.DONE
                continue

            if channel is errors:
                raise item

            result.written.append(self._handle(item))

    def _handle(self, record: Record) -> Path:
        payload = self.transformer.transform(record)
        path = self.writer.write(record, payload)
        logger.info(f"  {record.source or record.name} -> {path}")
        return path
