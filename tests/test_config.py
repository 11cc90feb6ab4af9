import os
import unittest

from pydantic import ValidationError

from radar_api.config import Settings


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        previous = os.environ.pop("RADAR_CACHE_TTL_SECONDS", None)
        try:
            s = Settings()
            self.assertEqual(s.cache_ttl_seconds, 300)
            self.assertEqual(s.fetch_timeout_seconds, 15.0)
            self.assertEqual(s.grid_stride, 10)
            self.assertEqual(
                s.latest_snapshot_url,
                "https://mrms.ncep.noaa.gov/2D/ReflectivityAtLowestAltitude/"
                "MRMS_ReflectivityAtLowestAltitude.latest.grib2.gz",
            )
            self.assertEqual(s.mrms_host, "mrms.ncep.noaa.gov")
            self.assertIn("http://localhost:3000", s.cors_origins)
        finally:
            if previous is not None:
                os.environ["RADAR_CACHE_TTL_SECONDS"] = previous

    def test_base_url_gets_single_trailing_slash(self):
        s = Settings(mrms_base_url="https://mirror.example/mrms//")
        self.assertEqual(s.mrms_base_url, "https://mirror.example/mrms/")
        self.assertEqual(s.latest_snapshot_url, "https://mirror.example/mrms/" + s.mrms_latest_file)

    def test_env_override(self):
        previous = os.environ.get("RADAR_CACHE_TTL_SECONDS")
        try:
            os.environ["RADAR_CACHE_TTL_SECONDS"] = "60"
            s = Settings()
            self.assertEqual(s.cache_ttl_seconds, 60)
        finally:
            if previous is None:
                os.environ.pop("RADAR_CACHE_TTL_SECONDS", None)
            else:
                os.environ["RADAR_CACHE_TTL_SECONDS"] = previous

    def test_rejects_zero_stride(self):
        with self.assertRaises(ValidationError):
            Settings(grid_stride=0)


if __name__ == "__main__":
    unittest.main()
