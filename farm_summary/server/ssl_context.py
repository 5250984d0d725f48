import ssl
from pathlib import Path
from typing import Dict, Optional, Tuple

from farm_summary.util.errors import CertificateLoadError


def private_ssl_paths(path: Path, config: Dict) -> Tuple[Path, Path]:
    return (
        path / config["ssl"]["private_crt"],
        path / config["ssl"]["private_key"],
    )


def ssl_context_for_client(
    private_cert_path: Path, private_key_path: Path, service_name: Optional[str] = None
) -> ssl.SSLContext:
    """
    Presents the service's private certificate but does not verify the daemon's
    certificate. The daemons serve certs signed by a locally generated CA that
    is not in any trust store, so verification is switched off on purpose.
    """
    ssl_context = ssl._create_unverified_context(purpose=ssl.Purpose.SERVER_AUTH)
    ssl_context.check_hostname = False
    ssl_context.verify_mode = ssl.CERT_NONE
    try:
        ssl_context.load_cert_chain(certfile=str(private_cert_path), keyfile=str(private_key_path))
    except (OSError, ssl.SSLError) as e:
        raise CertificateLoadError(
            f"Could not load certificate {private_cert_path} / {private_key_path}: {e}", service=service_name
        ) from e
    return ssl_context
