import logging
from importlib.metadata import PackageNotFoundError, version

from spectral_components.analysis.spectral import decompose_spectra
from spectral_components.config_api.pipeline import run_pipeline


# Setup the version
try:
    __version__ = version("spectral-components")
except PackageNotFoundError:
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

# Configure logging
logging.basicConfig(
    format="%(asctime)s %(levelname)s %(name)s [%(filename)s:%(lineno)d:%(funcName)s]: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    level=logging.INFO,
)
logger = logging.getLogger("spectral-components")
logger.debug("Version %s", __version__)
del logger, logging
