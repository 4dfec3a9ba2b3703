"""
Request-level coordination for boarding sequence computation.

This module sits between the HTTP layer and the pure sequencing core:
- Decoding uploaded bytes with the configured encoding
- Parsing and validating that at least one booking is present
- Selecting the ordering strategy and computing the sequence
- Logging a one-line summary per computation

SequenceService holds only read-only configuration. Every call computes from
its own input, so concurrent requests never share data.
"""

from __future__ import annotations

import logging
from typing import Tuple

from omegaconf import DictConfig

from .configuration import build_config_metadata, build_priority_tables, get_config_container, make_runtime_config
from .exceptions import NoValidBookingsError
from .models import ConfigMetadata, SequenceResponse
from .sequencer import PriorityTable, plan_text
from .utils import decode_upload

logger = logging.getLogger(__name__)


class SequenceService:
    """
    Coordinator for turning an uploaded booking file into a boarding order.

    Attributes:
        config: Runtime configuration the service was built from
        priority_tables: Closed seat sets checked before the heuristic
        encoding: Codec used to decode uploads
    """

    def __init__(self, config: DictConfig | None = None) -> None:
        """
        Initialize the service.

        Args:
            config: Runtime configuration (default: packaged config.yaml
                merged with any BOARDING_CONFIG_PATH override)
        """
        self.config = config if config is not None else make_runtime_config()
        container = get_config_container(self.config)
        self.priority_tables: Tuple[PriorityTable, ...] = build_priority_tables(self.config)
        self.encoding: str = container["upload"]["encoding"]

    def get_config_metadata(self) -> ConfigMetadata:
        return build_config_metadata(self.config)

    def sequence_text(self, text: str, source: str = "upload") -> SequenceResponse:
        """
        Compute the boarding sequence for decoded booking text.

        Args:
            text: Booking file content
            source: Label used in log messages (typically the filename)

        Returns:
            SequenceResponse with one entry per valid booking

        Raises:
            NoValidBookingsError: If the text contains no valid booking line
        """
        try:
            plan = plan_text(text, self.priority_tables)
        except NoValidBookingsError:
            logger.info(f"No valid booking lines in {source}")
            raise

        selection = plan.selection
        table_name = f" ({selection.table.name})" if selection.table else ""
        logger.info(f"Sequenced {len(plan.entries)} bookings from {source} using {selection.strategy.value}{table_name}")
        return SequenceResponse(sequence=list(plan.entries))

    def sequence_upload(self, raw: bytes, source: str = "upload") -> SequenceResponse:
        """
        Decode uploaded bytes and compute the boarding sequence.

        Raises:
            NoValidBookingsError: If the decoded text contains no valid booking line
        """
        return self.sequence_text(decode_upload(raw, self.encoding), source=source)
