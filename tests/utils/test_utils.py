import pytest

from lanchat.utils import generate_session_name, join_endpoint, split_endpoint, subnet_broadcast
from lanchat.utils.errors import DeliveryError, IndexOutOfRange, LanChatError, ValidationError


def test_session_name_prefix_and_digits():
    name = generate_session_name()
    assert name.startswith("User-")
    assert name[len("User-"):].isdigit()


def test_session_names_differ():
    assert generate_session_name() != generate_session_name()


def test_session_name_custom_prefix():
    assert generate_session_name("Peer-").startswith("Peer-")


def test_endpoint_round_trip():
    assert split_endpoint(join_endpoint("192.168.10.4", 8080)) == ("192.168.10.4", 8080)


@pytest.mark.parametrize("endpoint", ["", "192.168.10.4", ":8080", "host:abc", "host:0", "host:65536", "host:\u00b2", "host:\u0661\u0662\u0663"])
def test_split_endpoint_rejects(endpoint):
    with pytest.raises(ValueError):
        split_endpoint(endpoint)


def test_subnet_broadcast():
    assert subnet_broadcast("192.168.10.4") == "192.168.10.255"


def test_error_hierarchy():
    assert issubclass(IndexOutOfRange, IndexError)
    assert issubclass(ValidationError, ValueError)
    cause = ConnectionRefusedError("refused")
    error = DeliveryError("10.0.0.1:8080", cause)
    assert isinstance(error, LanChatError)
    assert error.cause is cause
    assert "10.0.0.1:8080" in str(error)
