import datetime
import ipaddress
import json
import logging
import socket
import ssl
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from farm_summary.rpc.rpc_client import RpcClient


class FakeDaemon:
    """
    Serves canned responses on POST /<method>, standing in for every chia daemon at once.
    """

    def __init__(self) -> None:
        self.responses: Dict[str, Tuple[int, Any]] = {}
        self.calls: List[str] = []
        self.requests: List[Dict[str, Any]] = []
        self.server: TestServer = None

    def set_response(self, method: str, body: Any, status: int = 200) -> None:
        self.responses[method] = (status, body)

    @property
    def url(self) -> str:
        return f"http://{self.server.host}:{self.server.port}/"

    async def handle(self, request: web.Request) -> web.Response:
        method = request.match_info["method"]
        self.calls.append(method)
        self.requests.append({"content_type": request.content_type, "body": await request.text()})
        status, body = self.responses.get(method, (404, {"success": False, "error": "no such method"}))
        text = body if isinstance(body, str) else json.dumps(body)
        return web.Response(status=status, text=text, content_type="application/json")


@pytest.fixture
async def fake_daemon():
    daemon = FakeDaemon()
    app = web.Application()
    app.router.add_post("/{method}", daemon.handle)
    daemon.server = TestServer(app)
    await daemon.server.start_server()
    yield daemon
    await daemon.server.close()


@pytest.fixture
def route_clients_to(monkeypatch):
    """
    Replaces the TLS client construction so service clients talk plain http to a FakeDaemon.
    """

    def _route(daemon: FakeDaemon) -> None:
        async def create(cls, self_hostname, port, crt_path, key_path, service_name=None):
            return await cls.create_for_url(daemon.url, False, service_name)

        monkeypatch.setattr(RpcClient, "create", classmethod(create))

    return _route


@pytest.fixture
def farm_responses() -> Dict[str, Any]:
    return {
        "get_blockchain_state": {"blockchain_state": {"space": 2000}, "success": True},
        "get_farmed_amount": {"farmed_amount": 5000000000000, "success": True},
        "get_connections": {"connections": [{}], "success": True},
        "get_plots": {"plots": [{"file_size": 600}, {"file_size": 424}], "success": True},
    }


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def write_self_signed_cert(directory: Path, common_name: str) -> Tuple[Path, Path]:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()), critical=False)
        .add_extension(
            x509.SubjectAlternativeName(
                [x509.DNSName("localhost"), x509.IPAddress(ipaddress.ip_address("127.0.0.1"))]
            ),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )
    crt_path = directory / f"private_{common_name}.crt"
    key_path = directory / f"private_{common_name}.key"
    crt_path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    key_path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return crt_path, key_path


def unused_port() -> int:
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class TlsDaemon(FakeDaemon):
    """
    FakeDaemon behind mutual TLS: its own self-signed server cert, and a client cert it requires.
    """

    def __init__(self, directory: Path) -> None:
        super().__init__()
        self.server_crt, self.server_key = write_self_signed_cert(directory, "full_node_server")
        self.client_crt, self.client_key = write_self_signed_cert(directory, "full_node")
        self.host = "127.0.0.1"
        self.port = unused_port()
        self.peer_common_names: List[str] = []
        self.runner: web.AppRunner = None

    @property
    def url(self) -> str:
        return f"https://{self.host}:{self.port}/"

    def ssl_context(self) -> ssl.SSLContext:
        ssl_context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        ssl_context.load_cert_chain(certfile=str(self.server_crt), keyfile=str(self.server_key))
        ssl_context.load_verify_locations(cafile=str(self.client_crt))
        ssl_context.verify_mode = ssl.CERT_REQUIRED
        return ssl_context

    async def handle(self, request: web.Request) -> web.Response:
        peercert = request.transport.get_extra_info("peercert")
        for rdn in peercert["subject"]:
            for key, value in rdn:
                if key == "commonName":
                    self.peer_common_names.append(value)
        return await super().handle(request)


@pytest.fixture
async def tls_daemon(tmp_path):
    daemon = TlsDaemon(tmp_path)
    app = web.Application()
    app.router.add_post("/{method}", daemon.handle)
    daemon.runner = web.AppRunner(app)
    await daemon.runner.setup()
    site = web.TCPSite(daemon.runner, daemon.host, daemon.port, ssl_context=daemon.ssl_context())
    await site.start()
    yield daemon
    await daemon.runner.cleanup()
