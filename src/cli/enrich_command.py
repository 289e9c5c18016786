"""Enrich command orchestration for CLI.

This module provides the EnrichCommand class that runs one enrichment walk
over a document file: it loads configuration and credentials, opens the
document, runs EnrichmentRun with a spinner, prints the summary and writes
the document back.
"""

import asyncio
import logging
from typing import Optional

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError, ConfigError, ConfigFilesystemError
from src.cli.models import EnrichConfig, ExitCode
from src.cli.output import OutputHandler
from src.document.document_store import JsonFileDocumentStore
from src.document.errors import DocumentError
from src.enrichment.enrichment_run import EnrichmentRun
from src.enrichment.models import EnrichmentReport
from src.jira_client.auth import Authenticator, Credentials
from src.jira_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
)
from src.jira_client.transport import HttpTransport, HttpxTransport

logger = logging.getLogger(__name__)


class EnrichCommand:
    """Orchestrates one enrichment of a document file.

    The workflow:
        1. Load configuration (optional YAML file)
        2. Load credentials from the environment / .env
        3. Load the document file
        4. Run the enrichment walk
        5. Save the document (unless dry run) and print the summary
        6. Return the matching exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> cmd = EnrichCommand(output_handler=output)
        >>> exit_code = cmd.run("notes.json")
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config_path: str = ConfigLoader.DEFAULT_CONFIG_PATH,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        transport: Optional[HttpTransport] = None,
    ):
        """Initialize enrich command with dependencies.

        Args:
            config_path: Path to configuration YAML file
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for Jira credentials (optional)
            transport: HttpTransport to use instead of a new HttpxTransport (optional)
        """
        self.config_path = config_path
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.transport = transport

    def run(
        self,
        document_path: str,
        tenant: Optional[str] = None,
        dry_run: bool = False,
        output_path: Optional[str] = None,
    ) -> ExitCode:
        """Enrich the Jira links of one document file.

        Args:
            document_path: Host JSON document to enrich
            tenant: Jira tenant overriding config and JIRA_TENANT
            dry_run: If True, do not write the document back
            output_path: Write the result here instead of document_path

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            logger.info(f"Loading configuration from {self.config_path}")
            config = ConfigLoader.load(self.config_path)
            self.output_handler.debug(
                f"Config: max_concurrency={config.max_concurrency}, "
                f"request_timeout={config.request_timeout}s, max_retries={config.max_retries}"
            )

            if not self.authenticator:
                self.authenticator = Authenticator(tenant_override=tenant or config.tenant)
            credentials = self.authenticator.get_credentials()

            store = JsonFileDocumentStore(document_path)
            store.load()
            self.output_handler.info(f"Loaded document {document_path}")

            with self.output_handler.spinner("Enriching Jira links..."):
                report = asyncio.run(self._enrich(store, credentials, config))

            if dry_run:
                self.output_handler.info("Dry run: document not written")
            else:
                written = store.save(output_path)
                self.output_handler.success(f"Wrote {written}")

            if report.partial:
                self.output_handler.warning(
                    f"{report.partial} Jira link(s) could not be removed after enrichment "
                    "and remain next to their replacement"
                )

            self.output_handler.print_enrichment_summary(report)
            return self._exit_code_for(report)

        except InvalidCredentialsError as e:
            logger.error(f"Authentication failed: {e}")
            self.output_handler.error(f"Authentication failed: {e}")
            self.output_handler.info(
                "Check JIRA_TENANT, JIRA_EMAIL and JIRA_API_KEY environment variables"
            )
            return ExitCode.AUTH_ERROR

        except (APIUnreachableError, APIAccessError) as e:
            logger.error(f"API error: {e}")
            self.output_handler.error(f"API error: {e}")
            return ExitCode.NETWORK_ERROR

        except (ConfigError, ConfigFilesystemError) as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(f"Configuration error: {e}")
            return ExitCode.GENERAL_ERROR

        except DocumentError as e:
            logger.error(f"Document error: {e}")
            self.output_handler.error(f"Document error: {e}")
            return ExitCode.GENERAL_ERROR

        except CLIError as e:
            logger.error(f"CLI error: {e}")
            self.output_handler.error(f"Error: {e}")
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during enrichment")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    async def _enrich(
        self,
        store: JsonFileDocumentStore,
        credentials: Credentials,
        config: EnrichConfig,
    ) -> EnrichmentReport:
        if self.transport is not None:
            return await self._run_walk(store, self.transport, credentials, config)

        async with HttpxTransport(timeout=config.request_timeout) as transport:
            return await self._run_walk(store, transport, credentials, config)

    async def _run_walk(
        self,
        store: JsonFileDocumentStore,
        transport: HttpTransport,
        credentials: Credentials,
        config: EnrichConfig,
    ) -> EnrichmentReport:
        enrichment = EnrichmentRun(
            store,
            transport,
            max_concurrency=config.max_concurrency,
            max_retries=config.max_retries,
        )
        return await enrichment.run(credentials)

    def _exit_code_for(self, report: EnrichmentReport) -> ExitCode:
        if report.has_errors:
            return ExitCode.BLOCK_ERRORS
        return ExitCode.SUCCESS
