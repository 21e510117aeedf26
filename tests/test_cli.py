"""
Tests for the command line entry point.
"""

from unittest.mock import patch

import pytest

from hcp_autoscaling_audit.__main__ import build_parser, main
from hcp_autoscaling_audit.classifier import LABEL_CLUSTER_ID, LABEL_HOSTED_CLUSTER_SIZE
from hcp_autoscaling_audit.errors import ClusterUnreachableError, NotManagementClusterError
from hcp_autoscaling_audit.kube_client import ManagementClusterClient

from conftest import FakeKubeClient, FakeOcmClient, make_hosted_cluster


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in ["MGMT_CLUSTER_ID", "OCM_TOKEN", "OUTPUT_FORMAT", "SHOW_ONLY", "NO_HEADERS", "LOG_FORMAT"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("OCM_TOKEN", "test-token")
    with patch("hcp_autoscaling_audit.config.load_dotenv"), \
            patch("hcp_autoscaling_audit.__main__.setup_logging"):
        yield


@pytest.fixture
def mock_run_audit():
    with patch("hcp_autoscaling_audit.__main__.run_audit") as mock:
        yield mock


class TestParser:
    """Tests for argument parsing."""

    def test_defaults_are_none(self):
        """Test unset flags do not override environment values."""
        args = build_parser().parse_args([])

        assert args.mgmt_cluster_id is None
        assert args.output is None
        assert args.show_only is None
        assert args.no_headers is None

    def test_flags(self):
        args = build_parser().parse_args([
            "--mgmt-cluster-id", "hs-mc-01",
            "--output", "csv",
            "--show-only", "needs-removal",
            "--no-headers",
            "--context", "mc",
        ])

        assert args.mgmt_cluster_id == "hs-mc-01"
        assert args.output == "csv"
        assert args.show_only == "needs-removal"
        assert args.no_headers is True
        assert args.context == "mc"


class TestMain:
    """Tests for exit codes."""

    def test_success(self, mock_run_audit):
        assert main(["--mgmt-cluster-id", "hs-mc-01", "--output", "json"]) == 0

        config = mock_run_audit.call_args.args[0]
        assert config.mgmt_cluster_id == "hs-mc-01"
        assert config.output == "json"
        assert config.ocm_token == "test-token"

    def test_missing_cluster_id(self, mock_run_audit):
        assert main([]) == 1
        mock_run_audit.assert_not_called()

    def test_invalid_output(self, mock_run_audit, caplog):
        assert main(["--mgmt-cluster-id", "mc", "--output", "xml"]) == 1
        mock_run_audit.assert_not_called()
        assert "invalid output format 'xml'" in caplog.text

    def test_invalid_show_only(self, mock_run_audit):
        assert main(["--mgmt-cluster-id", "mc", "--show-only", "everything"]) == 1
        mock_run_audit.assert_not_called()

    @pytest.mark.parametrize("error", [
        ClusterUnreachableError("failed to list namespaces after 3 attempts", attempts=3),
        NotManagementClusterError("2abc"),
    ])
    def test_fatal_audit_errors(self, mock_run_audit, error, caplog):
        mock_run_audit.side_effect = error

        assert main(["--mgmt-cluster-id", "mc"]) == 1
        assert str(error) in caplog.text

    def test_unexpected_error(self, mock_run_audit):
        mock_run_audit.side_effect = RuntimeError("boom")

        assert main(["--mgmt-cluster-id", "mc"]) == 1

    def test_keyboard_interrupt(self, mock_run_audit):
        mock_run_audit.side_effect = KeyboardInterrupt()

        assert main(["--mgmt-cluster-id", "mc"]) == 130

    def test_empty_namespace_does_not_fail_audit(self, capsys, caplog):
        """Test that a tenant namespace without a HostedCluster is skipped, not fatal."""
        kube = FakeKubeClient(
            namespaces=["ocm-production-001", "ocm-production-002"],
            hosted_clusters={
                "ocm-production-001": [
                    make_hosted_cluster(
                        "hc-001",
                        "ocm-production-001",
                        labels={LABEL_CLUSTER_ID: "id-001", LABEL_HOSTED_CLUSTER_SIZE: "small"},
                    ),
                ],
            },
        )

        with patch("hcp_autoscaling_audit.orchestrator.OcmClient") as ocm_class, \
                patch.object(ManagementClusterClient, "from_kubeconfig", return_value=kube):
            ocm_class.return_value.__enter__.return_value = FakeOcmClient()
            exit_code = main(["--mgmt-cluster-id", "hs-mc-test", "--output", "csv"])

        assert exit_code == 0
        stdout = capsys.readouterr().out
        assert "id-001,hc-001,ocm-production-001,false,false,small,N/A" in stdout
        assert "ocm-production-002" not in stdout
        assert "Failed to audit namespace ocm-production-002" in caplog.text
