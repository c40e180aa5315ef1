"""Extract / transform / write pipeline."""

import logging

from mdprompt.config import PipelineConfig
from mdprompt.ingesters import FolderIngester, get_ingester
from mdprompt.pipeline.channel import Channel, ChannelCancelled, ChannelClosed, select
from mdprompt.pipeline.coordinator import Coordinator, PipelineResult, PipelineState
from mdprompt.transformers import ChatRequestTransformer
from mdprompt.writers import JsonFileWriter

logger = logging.getLogger(__name__)


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """Convert every Markdown document under ``config.input_dir``.

    Args:
        config: Input and output locations

    Returns:
        The files written

    Raises:
        MdPromptError: On the first fatal error
    """
    # A missing source still goes through the producer, which reports it.
    ingester = get_ingester(config.input_dir) or FolderIngester()
    coordinator = Coordinator(
        ingester=ingester,
        transformer=ChatRequestTransformer(),
        writer=JsonFileWriter(config.output_dir, create=config.create_output),
    )

    logger.info(f"Converting {config.input_dir} -> {config.output_dir}")
    result = coordinator.run(config.input_dir)
    logger.info(f"Converted {result.count} files -> {config.output_dir}")
    return result


__all__ = [
    "Channel",
    "ChannelCancelled",
    "ChannelClosed",
    "Coordinator",
    "PipelineResult",
    "PipelineState",
    "run_pipeline",
    "select",
]
