import logging
import subprocess
from pathlib import Path

import jsii
from aws_cdk import BundlingOptions, ILocalBundling
from aws_cdk import aws_lambda as _lambda
from constructs import Construct

logger = logging.getLogger(__name__)

COMMON_LAYER_PATH = "layers/common_layer"

# Installers tried in order before CDK falls back to the Docker bundling image.
INSTALLERS: tuple[tuple[str, ...], ...] = (
    ("uv", "pip", "install", "-r", "{requirements}", "--target", "{target}"),
    ("pip", "install", "-r", "{requirements}", "-t", "{target}"),
)


@jsii.implements(ILocalBundling)
class PythonLocalBundling:
    """Installs a layer's requirements.txt on the host, skipping Docker"""

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def try_bundle(self, output_dir: str, options: BundlingOptions) -> bool:
        """Return True when a local installer produced the layer.

        False tells CDK to run the Docker bundling command instead.
        """
        del options  # unused
        requirements_path = Path(self.source_path) / "requirements.txt"
        target_dir = Path(output_dir) / "python"

        if not requirements_path.exists():
            logger.warning("requirements.txt not found: %s", requirements_path)
            return False

        for template in INSTALLERS:
            command = [
                part.format(requirements=requirements_path, target=target_dir)
                for part in template
            ]
            if self._run_installer(command):
                return True

        logger.warning("Local bundling failed, falling back to Docker")
        return False

    def _run_installer(self, command: list[str]) -> bool:
        installer = command[0]
        try:
            logger.info("Bundling layer locally with %s", installer)
            subprocess.run([*command, "--quiet"], check=True)
        except FileNotFoundError:
            logger.debug("%s not found", installer)
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("%s install failed: %s", installer, e)
            return False
        logger.info("Local bundling with %s succeeded", installer)
        return True


class Layers(Construct):
    """Lambda Layers Construct"""

    def __init__(self, scope: Construct, id: str) -> None:
        super().__init__(scope, id)

        self.common_layer = _lambda.LayerVersion(
            self,
            "CommonLayer",
            code=_lambda.Code.from_asset(
                COMMON_LAYER_PATH,
                bundling=BundlingOptions(
                    image=_lambda.Runtime.PYTHON_3_14.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output/python",
                    ],
                    local=PythonLocalBundling(COMMON_LAYER_PATH),
                ),
            ),
            compatible_runtimes=[_lambda.Runtime.PYTHON_3_14],
            description="Powertools, pydantic, stripe, requests, jose, werkzeug",
        )
