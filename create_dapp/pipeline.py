"""create-dapp pipeline orchestrator.

Runs the scaffold in one linear pass:

1. create the target directory,
2. materialize the template into it,
3. resolve template/signing variants,
4. create the module publisher account and write ``.env``,
5. install dependencies,
6. record telemetry.

Every step works on the explicit target path; the process working directory
is never changed.  Any exception ends the run: the active spinner is marked
failed, the traceback is printed, and a failed ``ScaffoldResult`` is
returned instead of raising.

Usage::

    python -m create_dapp.pipeline --template boilerplate-template --project-name demo
"""

from __future__ import annotations

import asyncio
import sys
import time
import traceback
from pathlib import Path

from create_dapp.accounts import AccountProvisioner
from create_dapp.config import Config
from create_dapp.installer import DependencyInstaller
from create_dapp.models import (
    Framework,
    Network,
    ScaffoldResult,
    Selections,
    SigningOption,
    TelemetryEvent,
    TemplateId,
    get_template,
)
from create_dapp.scaffolder import (
    EnvironmentSynthesizer,
    FileMaterializer,
    TemplateRenderer,
    VariantResolver,
)
from create_dapp.telemetry import TelemetryClient
from create_dapp.utils import (
    StepSpinner,
    console,
    format_duration,
    print_error,
    print_summary_table,
    print_warning,
    spinner,
)


class ScaffoldPipeline:
    """Sequences materialization, variant resolution and ``.env`` synthesis.

    Collaborators default to the real implementations built from *config*;
    tests pass fakes.

    Attributes:
        config: Global configuration.
        current_step: Name of the step being executed, ``None`` when idle.
    """

    def __init__(
        self,
        config: Config,
        provisioner: AccountProvisioner | None = None,
        installer: DependencyInstaller | None = None,
        telemetry: TelemetryClient | None = None,
        materializer: FileMaterializer | None = None,
        resolver: VariantResolver | None = None,
    ) -> None:
        self.config = config
        self.renderer = TemplateRenderer()
        self.materializer = materializer or FileMaterializer()
        self.resolver = resolver or VariantResolver()
        self.synthesizer = EnvironmentSynthesizer(
            provisioner or AccountProvisioner(config.faucet), self.renderer
        )
        self.installer = installer or DependencyInstaller(timeout=config.install_timeout)
        self.telemetry = telemetry or TelemetryClient(config.telemetry)
        self.current_step: str | None = None
        self._spinner: StepSpinner | None = None

    # ------------------------------------------------------------------
    # Step bookkeeping
    # ------------------------------------------------------------------

    def _begin(self, step: str, text: str | None = None) -> None:
        self.current_step = step
        if text is not None:
            self._spinner = spinner(text)

    def _complete(self, result: ScaffoldResult, succeed_spinner: bool = True) -> None:
        result.steps_completed.append(self.current_step or "")
        if succeed_spinner and self._spinner is not None:
            self._spinner.succeed()
            self._spinner = None

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self, selections: Selections) -> ScaffoldResult:
        """Scaffold a project for *selections*.

        Returns:
            A ``ScaffoldResult``; ``success`` is ``False`` if any step raised.
        """
        started = time.monotonic()
        project_name = selections.project_name or self.config.default_project_name
        template_dir = self.config.template_path(selections.template.path)
        target = self.config.target_path(project_name)
        result = ScaffoldResult(project_path=target)

        console.print()
        try:
            self._begin("create-target", f"Scaffolding project in {target}")
            await self.materializer.create_target(target)
            self._complete(result, succeed_spinner=False)

            self._begin("materialize")
            await self.materializer.materialize(template_dir, target)
            self._complete(result)

            self._begin("resolve-variant", f"Applying {selections.template.name} options")
            additional_content = await self.resolver.resolve(selections, target)
            self._complete(result)

            self._begin("create-account", "Creating a module publisher account")
            account = await self.synthesizer.create_account(selections)
            self._complete(result)

            self._begin("write-env", "Writing .env")
            await self.synthesizer.write_env_file(
                selections, account, target, project_name, additional_content
            )
            self._complete(result)

            self._install_hint(selections)
            if self.config.skip_install:
                self._begin("install")
                print_warning("Skipping dependency installation.")
                self._complete(result)
            else:
                self._begin("install", "Installing the dependencies")
                await self.installer.install(target)
                self._complete(result)

            self._begin("telemetry")
            await self._record_telemetry(selections)
            self._complete(result)

        except Exception as exc:
            result.success = False
            result.failed_step = self.current_step
            result.error = str(exc)
            message = f"Failed to scaffold project: {exc}"
            if self._spinner is not None:
                self._spinner.fail(message)
                self._spinner = None
            else:
                print_error(f"✖ {message}")
            console.print(f"[dim]{traceback.format_exc()}[/dim]")
        else:
            result.success = True
            self._print_next_steps(project_name, selections, account.address)
        finally:
            self.current_step = None
            result.duration = format_duration(time.monotonic() - started)

        return result

    async def _record_telemetry(self, selections: Selections) -> bool:
        event = TelemetryEvent(
            command=self.config.command_name,
            project_name=selections.project_name,
            template=selections.template.name,
            framework=selections.framework.value,
            network=selections.network.value,
            signing_option=selections.signing_option,
        )
        return await self.telemetry.record(event)

    # ------------------------------------------------------------------
    # Console output
    # ------------------------------------------------------------------

    def _install_hint(self, selections: Selections) -> None:
        console.print(self.renderer.render("docs_hint.j2", {"template": selections.template}))

    def _print_next_steps(self, project_name: str, selections: Selections, address: str) -> None:
        print_summary_table(
            {
                "Project": project_name,
                "Template": selections.template.name,
                "Network": selections.network.value,
                "Publisher account": address,
            },
            title="Scaffold Results",
        )
        console.print(
            self.renderer.render(
                "next_steps.j2",
                {
                    "project_name": project_name,
                    "skip_install": self.config.skip_install,
                    "install_command": " ".join(self.installer.command),
                },
            )
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_selections(
    template: str,
    project_name: str | None = None,
    network: str = Network.TESTNET.value,
    framework: str | None = None,
    signing_option: str | None = None,
) -> Selections:
    """Build ``Selections`` from plain CLI values using the template catalog."""
    info = get_template(template)
    return Selections(
        project_name=project_name,
        template=info,
        network=Network(network),
        framework=Framework(framework) if framework else info.framework,
        signing_option=signing_option,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-dapp`` / ``python -m create_dapp.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="create-dapp -- scaffold an Aptos dapp from a template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-dapp --template boilerplate-template --project-name demo\n"
            "  create-dapp -t clicker-game-tg-mini-app-template --signing-option explicit\n"
        ),
    )
    parser.add_argument(
        "--template", "-t",
        required=True,
        choices=[t.value for t in TemplateId],
        help="Template to scaffold",
    )
    parser.add_argument(
        "--project-name", "-n",
        default=None,
        help="Project directory name (default: my-aptos-dapp)",
    )
    parser.add_argument(
        "--network",
        default=Network.TESTNET.value,
        choices=[n.value for n in Network],
        help="Network the dapp targets (default: testnet)",
    )
    parser.add_argument(
        "--framework",
        default=None,
        choices=[f.value for f in Framework],
        help="Frontend framework (default: the template's own)",
    )
    parser.add_argument(
        "--signing-option",
        default=None,
        help=f"Signing mode for templates that offer one ({', '.join(s.value for s in SigningOption)})",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory of the project (default: current directory)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not install dependencies",
    )

    args = parser.parse_args(argv)

    config = Config.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.skip_install:
        config.skip_install = True

    selections = build_selections(
        args.template,
        project_name=args.project_name,
        network=args.network,
        framework=args.framework,
        signing_option=args.signing_option,
    )

    result = asyncio.run(ScaffoldPipeline(config).run(selections))
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
