# -*- coding: utf-8 -*-
import pytest
import requests

from common.network_utils import download_file, fetch_text, get_latest_release


@pytest.fixture
def mock_get(mocker):
    return mocker.patch("common.network_utils.requests.get")


def test_get_latest_release_returns_tag(mock_get, app_settings, mock_logger):
    mock_get.return_value.json.return_value = {"tag_name": "v1.4.2", "name": "v1.4.2"}

    assert get_latest_release("pterodactyl/wings", app_settings, mock_logger) == "v1.4.2"
    assert (
        mock_get.call_args.args[0]
        == "https://api.github.com/repos/pterodactyl/wings/releases/latest"
    )
    assert mock_get.call_args.kwargs["timeout"] == app_settings.request_timeout


def test_get_latest_release_http_error(mock_get, app_settings, mock_logger):
    mock_get.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError("403")

    assert get_latest_release("pterodactyl/wings", app_settings, mock_logger) == ""
    mock_logger.warning.assert_called_once()


def test_get_latest_release_network_error(mock_get, app_settings, mock_logger):
    mock_get.side_effect = requests.exceptions.ConnectionError("offline")

    assert get_latest_release("pterodactyl/wings", app_settings, mock_logger) == ""


def test_get_latest_release_without_tag_name(mock_get, app_settings, mock_logger):
    mock_get.return_value.json.return_value = {"message": "Not Found"}

    assert get_latest_release("pterodactyl/wings", app_settings, mock_logger) == ""


def test_get_latest_release_invalid_json(mock_get, app_settings, mock_logger):
    mock_get.return_value.json.side_effect = ValueError("not json")

    assert get_latest_release("pterodactyl/wings", app_settings, mock_logger) == ""


def test_download_file_streams_to_destination(mock_get, app_settings, mock_logger, tmp_path):
    response = mock_get.return_value.__enter__.return_value
    response.iter_content.return_value = [b"abc", b"", b"def"]
    destination = tmp_path / "nested" / "wings"

    result = download_file("https://example.com/wings", destination, app_settings, mock_logger)

    assert result == destination
    assert destination.read_bytes() == b"abcdef"
    assert mock_get.call_args.kwargs["stream"] is True
    response.raise_for_status.assert_called_once()


def test_download_file_propagates_http_error(mock_get, app_settings, mock_logger, tmp_path):
    response = mock_get.return_value.__enter__.return_value
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("404")

    with pytest.raises(requests.exceptions.HTTPError):
        download_file("https://example.com/wings", tmp_path / "wings", app_settings, mock_logger)
    assert not (tmp_path / "wings").exists()


def test_fetch_text(mock_get, app_settings, mock_logger):
    mock_get.return_value.text = "-----BEGIN PGP PUBLIC KEY BLOCK-----"

    assert fetch_text("https://example.com/gpg", app_settings, mock_logger).startswith("-----BEGIN")
