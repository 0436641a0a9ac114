class PerformanceMonitor:
    def __init__(self, window_size: int = 30):
        self.window_size = window_size
        self.render_times = []
        self.last_timestamp = None
        self.frame_intervals = []
        self.frame_count = 0

    def update(self, render_time: float, timestamp: float):
        """Record one presented frame"""
        self.frame_count += 1
        self.render_times.append(render_time)
        if len(self.render_times) > self.window_size:
            self.render_times.pop(0)

        if self.last_timestamp is not None:
            interval = timestamp - self.last_timestamp
            self.frame_intervals.append(interval)
            if len(self.frame_intervals) > self.window_size:
                self.frame_intervals.pop(0)

        self.last_timestamp = timestamp

    def get_stats(self) -> dict:
        """Get current performance statistics"""
        stats = {"frame_count": self.frame_count}

        if self.render_times:
            stats["avg_render_time"] = sum(self.render_times) / len(self.render_times)
            stats["max_render_time"] = max(self.render_times)

        if self.frame_intervals:
            avg_interval = sum(self.frame_intervals) / len(self.frame_intervals)
            stats["avg_interval"] = avg_interval
            if avg_interval > 0:
                stats["avg_fps"] = 1.0 / avg_interval

        return stats
