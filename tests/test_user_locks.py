import gc
import threading

from mindlog.utils.user_locks import UserLockRegistry


def test_same_user_shares_a_lock_while_referenced():
    registry = UserLockRegistry()
    first = registry.lock_for("u1")

    assert registry.lock_for("u1") is first
    assert registry.lock_for("u2") is not first


def test_released_locks_leave_the_registry():
    registry = UserLockRegistry()
    for n in range(50):
        with registry.hold(f"user-{n}"):
            pass
    gc.collect()

    assert len(registry) == 0


def test_hold_serializes_one_user():
    registry = UserLockRegistry()
    inside = []
    overlaps = []

    def work():
        with registry.hold("u1"):
            inside.append(1)
            if len(inside) > 1:
                overlaps.append(True)
            inside.pop()

    threads = [threading.Thread(target=work) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert overlaps == []
