# Multiply-with-carry random number generator
# Every run resets the stream so all configurations see the same sequence.

SEED_W = 0xABABAB55
SEED_Z = 0x05080902

UINT32_MAX = 0xFFFFFFFF


class RandomStream:
    def __init__(self, seed_w=SEED_W, seed_z=SEED_Z):
        self.seed_w = seed_w & UINT32_MAX
        self.seed_z = seed_z & UINT32_MAX
        self.m_w = self.seed_w
        self.m_z = self.seed_z

    def reset(self):
        self.m_w = self.seed_w
        self.m_z = self.seed_z

    def next32(self) -> int:
        self.m_z = (36969 * (self.m_z & 0xFFFF) + (self.m_z >> 16)) & UINT32_MAX
        self.m_w = (18000 * (self.m_w & 0xFFFF) + (self.m_w >> 16)) & UINT32_MAX
        return ((self.m_z << 16) + self.m_w) & UINT32_MAX

    # divides by UINT32_MAX, so 1.0 itself is reachable
    def next_double(self) -> float:
        return self.next32() / UINT32_MAX

    def next_bounded(self, bound) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self.next32() % bound
