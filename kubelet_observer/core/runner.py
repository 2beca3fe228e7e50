import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from rich.console import Console

from kubelet_observer.core.abstract import formatters
from kubelet_observer.core.decoder import decode
from kubelet_observer.core.exceptions import DecodeError, KubeletRequestError, MappingError
from kubelet_observer.core.integrations.kubelet import KubeletClient
from kubelet_observer.core.mapper import Clock, InstanceMapper, now
from kubelet_observer.core.models.config import settings
from kubelet_observer.core.models.instances import ServiceInstances
from kubelet_observer.core.models.result import Result
from kubelet_observer.utils.print import print
from kubelet_observer.utils.version import get_version

logger = logging.getLogger("kubelet_observer")


class CriticalRunnerException(Exception): ...


class Runner:
    EXPECTED_EXCEPTIONS = (DecodeError, MappingError, KubeletRequestError, CriticalRunnerException)

    def __init__(self, clock: Clock = now) -> None:
        self._client = KubeletClient(settings.hosturl, timeout=settings.request_timeout)
        self._mapper = InstanceMapper(settings.hosturl, clock=clock)

        # Instances discovered in the previous cycle, handed back to the mapper
        self._instances: Optional[ServiceInstances] = None

        # This executor will be running the blocking requests to the kubelet
        self._executor = ThreadPoolExecutor(1)

    def _greet(self) -> None:
        if settings.quiet:
            return

        print(f"Running kubelet-observer {get_version()}")
        print(f"Using kubelet: {settings.hosturl}")
        print(f"Using formatter: {settings.format}")
        print("")

    def _read_file_input(self, path: str) -> bytes:
        logger.info(f"Reading pods from file: {path}")
        try:
            with open(path, "rb") as source_file:
                return source_file.read()
        except OSError as e:
            raise CriticalRunnerException(f"Could not read pods from {path}: {e}") from e

    async def _load_payload(self) -> bytes:
        if settings.file_input:
            return self._read_file_input(settings.file_input)

        loop = asyncio.get_running_loop()
        logger.info(f"Fetching pods from {self._client.pods_url}")
        return await loop.run_in_executor(self._executor, self._client.fetch_pods)

    async def discover(self) -> ServiceInstances:
        """Run one discovery cycle and return the instances found."""

        payload = await self._load_payload()
        snapshot = decode(payload)
        self._instances = self._mapper.map(self._instances, snapshot)
        logger.info(f"Discovered {len(self._instances)} service instances in {len(snapshot.pods)} pods")
        return self._instances

    def _process_result(self, result: Result) -> None:
        Formatter = settings.Formatter
        formatted = result.format(Formatter)
        rich = formatters.is_rich(Formatter)

        if rich:
            Console(width=settings.width).print(formatted)
        else:
            print(formatted, rich=False, force=True)

        if settings.file_output:
            logger.info(f"Writing output to file: {settings.file_output}")
            with open(settings.file_output, "w") as target_file:
                # don't use rich when writing a json or yaml to avoid line wrapping etc
                if rich:
                    console = Console(file=target_file, width=settings.width)
                    console.print(formatted)
                else:
                    target_file.write(formatted)

    async def run(self) -> int:
        """Run the Runner. The return value is the exit code of the program."""
        self._greet()

        try:
            instances = await self.discover()
            self._process_result(Result(instances=instances, hosturl=settings.hosturl))
        except DecodeError as e:
            logger.critical(e)
            for error in e.errors:
                logger.error(f"{error['loc']}: {error['msg']}")
            return 1  # Exit with error
        except self.EXPECTED_EXCEPTIONS as e:
            logger.critical(e)
            return 1  # Exit with error
        except Exception:
            logger.exception("An unexpected error occurred")
            return 1  # Exit with error
        else:
            return 0  # Exit with success
        finally:
            self._executor.shutdown(wait=False)
