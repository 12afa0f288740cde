import argparse
import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .errors import ExhibitorCreationError

log = logging.getLogger("exhibitor_web.cli")


class CLIOption(NamedTuple):
    name: str
    metavar: Optional[str]
    help: str
    default: Optional[str] = None


class _CreatorArgumentParser(argparse.ArgumentParser):
    """An ArgumentParser that reports errors instead of exiting the process."""

    def __init__(self, cli: "ExhibitorCLI", **kwargs) -> None:
        super().__init__(**kwargs)
        self.cli = cli

    def error(self, message: str):
        raise ExhibitorCreationError.creator_exit(self.cli, f"Invalid arguments: {message}")


class ExhibitorCLI:
    """
    The options understood by the supervisor creator.

    Options use single-dash long names (``-configtype s3``) so they line up
    one to one with the ``exhibitor-<name>`` properties they come from.
    """

    CONFIG_TYPE = "configtype"
    REMOTE_CLIENT_AUTHORIZATION = "remoteauth"
    HELP = "help"

    OPTIONS: Tuple[CLIOption, ...] = (
        CLIOption(CONFIG_TYPE, "type", "Manner in which the shared config is stored: s3, zookeeper, file or none. Required."),
        CLIOption("configcheckms", "ms", "Period (ms) to check for shared config updates.", "30000"),
        CLIOption("defaultconfig", "path", "Path to a properties file with the default shared config."),
        CLIOption("fsconfigdir", "dir", "Directory holding the shared config file (configtype=file)."),
        CLIOption("fsconfigname", "name", "Name of the shared config file (configtype=file).", "exhibitor.properties"),
        CLIOption("fsconfiglockprefix", "prefix", "Prefix of the shared config lock file (configtype=file).", "exhibitor-lock-"),
        CLIOption("s3config", "bucket:key", "Bucket and key of the shared config (configtype=s3)."),
        CLIOption("s3credentials", "path", "Properties file with the S3 access key and secret."),
        CLIOption("s3region", "region", "Region used for S3 calls."),
        CLIOption("s3backup", "true|false", "Back up ZooKeeper transaction logs to S3.", "false"),
        CLIOption("zkconfigconnect", "host:port,...", "Connection string of the ZooKeeper ensemble holding the shared config (configtype=zookeeper)."),
        CLIOption("zkconfigzpath", "path", "ZooKeeper path of the shared config (configtype=zookeeper)."),
        CLIOption("zkconfigretry", "sleep-ms:retries", "Retry policy for the config ZooKeeper client.", "1000:3"),
        CLIOption("zkconfigexhibitorport", "port", "Port of the Exhibitor instances in the config ensemble."),
        CLIOption("zkconfigexhibitorpath", "path", "URI path of the Exhibitor instances in the config ensemble.", "/"),
        CLIOption("filesystembackup", "true|false", "Back up ZooKeeper transaction logs to the local file system.", "false"),
        CLIOption("timeout", "ms", "Connection timeout (ms) for ZooKeeper connections.", "30000"),
        CLIOption("loglines", "count", "Max lines of logging to keep in memory for display.", "1000"),
        CLIOption("hostname", "name", "Hostname to use for this instance.", "localhost"),
        CLIOption("port", "port", "Port of the Exhibitor REST API.", "8080"),
        CLIOption("headingtext", "text", "Extra text to display in the UI header."),
        CLIOption("nodemodification", "true|false", "Allow nodes to be modified, deleted or created.", "true"),
        CLIOption("prefspath", "path", "Path to store Exhibitor preferences."),
        CLIOption(REMOTE_CLIENT_AUTHORIZATION, "type:base64(user:pass)", "Authorization for remote Exhibitor calls. type is basic or digest."),
        CLIOption(HELP, None, "Print this help."),
    )

    def __init__(self) -> None:
        self.parser = _CreatorArgumentParser(
            self,
            prog="exhibitor",
            add_help=False,
            allow_abbrev=False,
            description="Exhibitor supervisor options",
        )
        for option in self.OPTIONS:
            if option.metavar is None:
                self.parser.add_argument(f"-{option.name}", dest=option.name, action="store_true", help=option.help)
            else:
                self.parser.add_argument(
                    f"-{option.name}", dest=option.name, metavar=option.metavar,
                    default=option.default, help=option.help,
                )

    def parse(self, args: Sequence[str]) -> argparse.Namespace:
        """
        Parses a creator argument array.

        Unknown options are logged and ignored; validating their meaning is
        left to whoever consumes them.

        :param args: Tokens of the form ``[-name, value, ...]``.
        :return: The parsed options.
        :raises ExhibitorCreationError: With kind CREATOR_EXIT on a parse error.
        """
        options, unknown = self.parser.parse_known_args(list(args))
        if unknown:
            log.warning(f"Ignoring unrecognized arguments: {' '.join(unknown)}")
        return options

    def help_lines(self, prefix: str = "") -> List[str]:
        lines = []
        for option in self.OPTIONS:
            name = f"{prefix}{option.name}"
            if option.metavar:
                name = f"{name} <{option.metavar}>"
            default = f" (default: {option.default})" if option.default is not None else ""
            lines.append(f"  {name:<45} {option.help}{default}")
        return lines

    def log_help(self, prefix: str = "") -> None:
        """
        Logs the option table, naming every option the way it is set.

        :param prefix: Prepended to each option name, e.g. 'exhibitor-' to show property names.
        """
        log.info("Exhibitor options:", extra={"raw": True})
        for line in self.help_lines(prefix):
            log.info(line, extra={"raw": True})
