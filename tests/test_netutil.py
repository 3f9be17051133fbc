from unittest.mock import MagicMock, patch

import pytest

from xlive.netutil import get_outbound_ip


def _fake_socket_class(local_address):
    fake = MagicMock()
    fake.getsockname.return_value = (local_address, 54321)
    socket_class = MagicMock()
    socket_class.return_value.__enter__.return_value = fake
    return socket_class, fake


def test_returns_local_end_of_udp_socket():
    socket_class, fake = _fake_socket_class("192.0.2.10")
    with patch("socket.socket", socket_class):
        assert get_outbound_ip() == "192.0.2.10"
    fake.connect.assert_called_once_with(("8.8.8.8", 80))


def test_connect_failure_raises_oserror():
    socket_class, fake = _fake_socket_class("192.0.2.10")
    fake.connect.side_effect = OSError("network unreachable")
    with patch("socket.socket", socket_class):
        with pytest.raises(OSError, match="network unreachable"):
            get_outbound_ip()


@pytest.mark.parametrize("address", ["", "0.0.0.0"])
def test_unknown_local_address_raises(address):
    socket_class, _ = _fake_socket_class(address)
    with patch("socket.socket", socket_class):
        with pytest.raises(OSError, match="cannot determine local IP address"):
            get_outbound_ip()