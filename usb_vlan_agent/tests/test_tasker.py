import asyncio

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from usb_vlan_agent.lib.tasker.one_shot_task import OneShotTask
from usb_vlan_agent.lib.tasker.repeating_task import RepeatingTask


def test_one_shot_never_expires(mocker):
    scheduler = mocker.Mock()

    OneShotTask(scheduler, "ConfigureVlan", "vlan10", task_executor=mocker.Mock(), delay=2.0)

    assert scheduler.add_job.call_args.kwargs["misfire_grace_time"] is None


@pytest.mark.asyncio
async def test_overdue_one_shot_still_runs_and_completes(mocker):
    scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())
    scheduler.start()
    try:
        executor = mocker.Mock(return_value="en5")
        on_complete = mocker.Mock()

        # Fire time well in the past, as after the host slept through it
        task = OneShotTask(
            scheduler, "ConfigureVlan", "vlan10", task_executor=executor, delay=-600, on_complete=on_complete
        )
        for _ in range(50):
            await asyncio.sleep(0.02)
            if on_complete.called:
                break

        executor.assert_called_once()
        on_complete.assert_called_once()
        assert task.done
    finally:
        scheduler.shutdown(wait=False)


def test_cancelled_one_shot_skips_on_complete(mocker):
    scheduler = mocker.Mock()
    on_complete = mocker.Mock()
    task = OneShotTask(scheduler, "ConfigureVlan", "vlan10", task_executor=mocker.Mock(), on_complete=on_complete)

    task.cancel()
    task.cancel()

    task.job.remove.assert_called_once()
    on_complete.assert_not_called()


def test_repeating_task_polls_without_overlap(mocker):
    scheduler = mocker.Mock()

    RepeatingTask(scheduler, "DeviceWatcher", "3034:33111", task_executor=mocker.Mock(), interval=1.0)

    kwargs = scheduler.add_job.call_args.kwargs
    assert scheduler.add_job.call_args.args[1] == "interval"
    assert kwargs["seconds"] == 1.0
    assert kwargs["max_instances"] == 1
    assert "start_date" not in kwargs
