from root_barrier.barrier.service import StabilizationBarrier

__all__ = ["StabilizationBarrier"]
