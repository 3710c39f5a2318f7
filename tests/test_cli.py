import math

import pytest
from scripts.run_simulation import main
from store_sim.status import LaneSnapshot, render_status


def test_cli_single_run(tmp_path, capsys):
    main(["--duration", "10", "--lanes", "2", "--output-dir", str(tmp_path), "--seed", "3"])
    out = capsys.readouterr().out

    assert "Minute 10:" in out
    assert "has joined the line." in out
    assert "Simulation Results:" in out
    assert "Average Wait Time per Customer:" in out
    assert (tmp_path / "reports" / "report_run0.json").exists()
    assert (tmp_path / "logs" / "events_run0.csv").exists()


def test_cli_batch_run(tmp_path, capsys):
    main(["--duration", "15", "--seeds", "3", "--output-dir", str(tmp_path)])
    out = capsys.readouterr().out

    assert "SUMMARY" in out
    assert "Minute 1:" not in out
    assert (tmp_path / "reports" / "report_run2.json").exists()


def test_cli_rejects_invalid_configuration(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--lanes", "0", "--output-dir", str(tmp_path)])
    assert exc.value.code == 2
    assert "Number of checkouts must be at least 1." in capsys.readouterr().out


def test_render_status():
    snapshots = [
        LaneSnapshot(lane=0, state="in_service", queue_length=3, customer_number=4,
                     remaining_time=2.5, actions=(("completed", 3), ("joined", 9), ("in_service", 4))),
        LaneSnapshot(lane=1, state="stalled", queue_length=1, customer_number=5,
                     remaining_time=math.inf, actions=(("stalled", 5),)),
        LaneSnapshot(lane=2, state="idle", queue_length=0, actions=(("completed", 2),)),
    ]
    text = render_status(7, snapshots)

    assert text.startswith("Minute 7:")
    assert "Checkout #1: Customer #3 has finished checking out." in text
    assert "Checkout #1: Customer #9 has joined the line." in text
    assert "Checkout #2: Customer #5 has an issue. No workers are available." in text
    assert "Checkout #3: Customer #2 has finished checking out." in text
    assert "Status of Checkout #1: OCCUPIED" in text
    assert "2.50 min left" in text
    assert "waiting for worker" in text
    assert "Status of Checkout #3: EMPTY" in text
