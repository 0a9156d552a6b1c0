import unittest
from datetime import datetime, timezone

from abstractions.metrics_sink import MetricsSink
from contracts.sample import Sample


class TestMetricsSinkAbstraction(unittest.IsolatedAsyncioTestCase):
    def test_cannot_instantiate_abstract(self):
        """MetricsSink cannot be instantiated directly"""
        with self.assertRaises(TypeError):
            MetricsSink()

    def test_subclass_must_implement_write(self):
        """A sink without write() stays abstract"""
        class PingOnlySink(MetricsSink):
            async def ping(self):
                return None

        with self.assertRaises(TypeError):
            PingOnlySink()

    async def test_subclass_with_all_methods(self):
        """A complete subclass works and inherits close()"""
        class ListSink(MetricsSink):
            def __init__(self):
                self.samples = []

            async def ping(self):
                return None

            async def write(self, sample):
                self.samples.append(sample)

        sink = ListSink()
        sample = Sample(time=datetime.now(timezone.utc), latency_ms=1.0)
        await sink.ping()
        await sink.write(sample)
        await sink.close()
        self.assertEqual(sink.samples, [sample])


if __name__ == "__main__":
    unittest.main()
