import threading

import pytest
from spring_tally.progress_queue import LatestQueue


class TestLatestQueue:
    """Test suite for LatestQueue"""

    def test_latest_wins(self):
        """Test only the newest unread item is returned"""
        queue = LatestQueue()
        queue.publish(1)
        queue.publish(2)
        assert queue.get(timeout=1) == 2
        with pytest.raises(TimeoutError):
            queue.get(timeout=0.01)

    def test_close_drains_then_none(self):
        """Test a pending item survives close and is read once"""
        queue = LatestQueue()
        queue.publish("last")
        queue.close()
        assert queue.get(timeout=1) == "last"
        assert queue.get(timeout=1) is None

    def test_publish_after_close_ignored(self):
        """Test publishing to a closed queue is a no-op"""
        queue = LatestQueue()
        queue.close()
        queue.publish("late")
        assert queue.closed
        assert queue.get(timeout=1) is None

    def test_timeout(self):
        """Test get raises when nothing arrives in time"""
        queue = LatestQueue()
        with pytest.raises(TimeoutError):
            queue.get(timeout=0.01)

    def test_wakes_waiting_reader(self):
        """Test a blocked reader is woken by another thread"""
        queue = LatestQueue()
        seen = []
        reader = threading.Thread(target=lambda: seen.append(queue.get(timeout=5)))
        reader.start()
        queue.publish("hello")
        reader.join(timeout=5)
        assert seen == ["hello"]
