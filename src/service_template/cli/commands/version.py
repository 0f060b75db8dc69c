"""Version command."""

from service_template.config import BuildInfo


class VersionCommand:
    """Print program version and build metadata."""

    name = "version"

    def __init__(self, program: str, version: str, build_info: BuildInfo):
        self.program = program
        self.version = version
        self.build_info = build_info

    def help(self) -> str:
        return "service-template version\n\n  Print the version, build tag and build date.\n"

    def synopsis(self) -> str:
        return "Show version information"

    def run(self, args: list[str]) -> int:
        print(f"{self.program} {self.version}")
        print(f"build tag: {self.build_info.tag}")
        print(f"build date: {self.build_info.date}")
        return 0
