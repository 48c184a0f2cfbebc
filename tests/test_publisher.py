import pytest

from xormqtt.publisher import main


def test_invalid_broker_ip(capsys):
    assert main(["--broker", "not-an-ip", "--count", "1"]) == 1
    assert "Erro no IP" in capsys.readouterr().out


def test_unreachable_broker(capsys):
    code = main(["--broker", "127.0.0.1", "--port", "1", "--count", "1",
                 "--connect-wait", "0", "--interval", "0"])
    assert code == 1
    assert "Falha ao conectar ao broker" in capsys.readouterr().out


def test_key_out_of_range_rejected():
    with pytest.raises(SystemExit) as info:
        main(["--encrypt", "--key", "300"])
    assert info.value.code == 2


def test_count_must_be_positive():
    with pytest.raises(SystemExit) as info:
        main(["--count", "0"])
    assert info.value.code == 2