"""arguments_demo.py"""

import sys
from enum import Enum
from pathlib import Path

from clippy import ArgumentDescriptor, Arguments, ParseOptions
from clippy.console import console, report_to_console
from clippy.exceptions import ParseError


class Place(Enum):
    """Enum for different places."""

    NEW_YORK = "New York"
    SAN_FRANCISCO = "San Francisco"
    LONDON = "London"

    def __str__(self):
        return self.value


deploy = Arguments(
    [
        ArgumentDescriptor("service", help="Service name to deploy.", required=True),
        ArgumentDescriptor(
            "-p/--place value",
            help="Deployment location.",
            value_type=Place,
            default="NEW_YORK",
        ),
        ArgumentDescriptor("-r/--region value", help="Deployment region.", default="us-east-1"),
        ArgumentDescriptor("--path value", help="Deployment path.", value_type=Path, completion="_files"),
        ArgumentDescriptor("-n/--numbers value", help="A number.", value_type=int),
        ArgumentDescriptor("-v/--verbose", help="Enable verbose output."),
        ArgumentDescriptor("-h/--help", help="Show this help."),
        ArgumentDescriptor("tags...", help="Tags to attach."),
    ],
    name="DeployArgs",
)


def main() -> int:
    if deploy.parse_all_forgiving(sys.argv[1:]).help:
        deploy.write_help()
        return 0
    try:
        args = deploy.parse_all(sys.argv[1:], ParseOptions(error_fn=report_to_console))
    except ParseError:
        return 2
    console.print(
        f"Deploying [bold]{args.service}[/] to {args.region} at {args.place} "
        f"from {args.path} with tags {args.tags}"
    )
    if args.verbose:
        console.print(deploy.generate_completion(function_name="deploy"), markup=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
