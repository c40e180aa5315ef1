"""Protocol definitions for extensible components."""

from mdprompt.protocols.ingester import Ingester
from mdprompt.protocols.transformer import Transformer
from mdprompt.protocols.writer import Writer

__all__ = ["Ingester", "Transformer", "Writer"]
