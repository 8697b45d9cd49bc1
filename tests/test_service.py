"""
Palette service client tests. The HTTP boundary is mocked at requests.request.
"""
import json
import sys
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import requests

from recolor.config import PROMPT_SUFFIX
from recolor.errors import AssignmentUnavailable, InvalidFormat, PaletteUnavailable
from recolor.recoloring.service import PaletteService, parse_rgb8, tokenize_palette


def _response(status: int, payload=None, raw: bytes | None = None, url: str = "http://svc/x") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = raw if raw is not None else json.dumps(payload).encode()
    resp.url = url
    resp.encoding = "utf-8"
    return resp


class TestPaletteService(unittest.TestCase):

    def setUp(self):
        self.service = PaletteService("http://svc/", timeout=5)
        patcher = mock.patch("recolor.api_client.requests.request")
        self.request = patcher.start()
        self.addCleanup(patcher.stop)

    def test_palette_from_image(self):
        self.request.return_value = _response(200, {"color_palette": ["#ff0000", "00ff00"]})
        palette = self.service.palette_from_image(b"\xff\xd8jpeg")
        self.assertEqual(palette, ["#FF0000", "#00FF00"])

        method, url = self.request.call_args.args
        kwargs = self.request.call_args.kwargs
        self.assertEqual((method, url), ("POST", "http://svc/process_image"))
        self.assertEqual(kwargs["data"], b"\xff\xd8jpeg")
        self.assertEqual(kwargs["headers"]["Content-Type"], "image/jpeg")
        self.assertEqual(kwargs["timeout"], 5)

    def test_palette_http_error(self):
        self.request.return_value = _response(500, raw=b"oops")
        with self.assertRaises(PaletteUnavailable) as ctx:
            self.service.palette_from_image(b"img")
        self.assertEqual(ctx.exception.context["status_code"], 500)
        self.assertEqual(self.request.call_count, 1)  # no retries

    def test_palette_empty_or_malformed(self):
        for payload in ({"color_palette": []}, {"color_palette": ["#12345"]}, {"other": 1}, ["#FFFFFF"]):
            with self.subTest(payload=payload):
                self.request.return_value = _response(200, payload)
                with self.assertRaises(PaletteUnavailable):
                    self.service.palette_from_image(b"img")

    def test_palette_invalid_json(self):
        self.request.return_value = _response(200, raw=b"<html>")
        with self.assertRaises(PaletteUnavailable):
            self.service.palette_from_image(b"img")

    def test_palette_timeout(self):
        self.request.side_effect = requests.exceptions.Timeout("slow")
        with self.assertRaises(PaletteUnavailable):
            self.service.palette_from_image(b"img")

    def test_palette_from_prompt(self):
        self.request.return_value = _response(200, {"palette": "  #112233 #445566\n#778899 "})
        palette = self.service.palette_from_prompt("ocean")
        self.assertEqual(palette, ["#112233", "#445566", "#778899"])
        sent = json.loads(self.request.call_args.kwargs["data"])
        self.assertEqual(sent, {"input_string": "ocean" + PROMPT_SUFFIX})
        self.assertEqual(self.request.call_args.args[1], "http://svc/process_prompt")

    def test_prompt_with_extra_text_is_rejected(self):
        self.request.return_value = _response(200, {"palette": "Here you go: #112233"})
        with self.assertRaises(PaletteUnavailable):
            self.service.palette_from_prompt("ocean")

    def test_request_assignment(self):
        self.request.return_value = _response(200, {"Background": [0, 128, 255], "Title": "red", "main": [1, 2, 3]})
        assignment = self.service.request_assignment(["main", "Background", "Title"], ["#FF0000", "#0080FF"])
        self.assertEqual(assignment.colors, {"Background": (0, 128, 255), "main": (1, 2, 3)})
        self.assertEqual(assignment.invalid, {"Title": "red"})
        sent = json.loads(self.request.call_args.kwargs["data"])
        self.assertEqual(sent, {
            "layers": [{"name": "main"}, {"name": "Background"}, {"name": "Title"}],
            "palette": [[255, 0, 0], [0, 128, 255]],
        })

    def test_assignment_errors(self):
        self.request.return_value = _response(503, raw=b"busy")
        with self.assertRaises(AssignmentUnavailable):
            self.service.request_assignment(["a"], ["#000000"])
        self.request.return_value = _response(200, [[1, 2, 3]])
        with self.assertRaises(AssignmentUnavailable):
            self.service.request_assignment(["a"], ["#000000"])
        self.request.return_value = None
        self.request.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(AssignmentUnavailable):
            self.service.request_assignment(["a"], ["#000000"])

    def test_empty_assignment_is_unavailable(self):
        for resp in (_response(200, {}), _response(200, raw=b"")):
            with self.subTest(body=resp.content):
                self.request.return_value = resp
                with self.assertRaises(AssignmentUnavailable):
                    self.service.request_assignment(["a"], ["#000000"])

    def test_assignment_without_valid_colors_is_unavailable(self):
        self.request.return_value = _response(200, {"A": "red", "B": [1, 2], "C": [0, 0, 999]})
        with self.assertRaises(AssignmentUnavailable) as ctx:
            self.service.request_assignment(["A", "B", "C"], ["#000000"])
        self.assertEqual(ctx.exception.context["response"], {"A": "red", "B": [1, 2], "C": [0, 0, 999]})

    def test_from_config(self):
        service = PaletteService.from_config({"service": {"api_base": "http://x", "timeout": 3}})
        self.assertEqual(service.api_base, "http://x")
        self.assertEqual(service.assign_path, "/assign_colors")
        self.assertEqual(service.timeout, 3.0)
        self.assertEqual(service.prompt_suffix, PROMPT_SUFFIX)


class TestParsing(unittest.TestCase):

    def test_parse_rgb8(self):
        self.assertEqual(parse_rgb8([0, 128, 255]), (0, 128, 255))
        self.assertEqual(parse_rgb8((10.4, 20.6, 30)), (10, 21, 30))
        for bad in ([1, 2], [1, 2, 300], [-1, 0, 0], "0,0,0", [True, 0, 0], None):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidFormat):
                    parse_rgb8(bad)

    def test_tokenize_palette(self):
        self.assertEqual(tokenize_palette("#A #B\t#C"), ["#A", "#B", "#C"])
        self.assertEqual(tokenize_palette(None), [])


if __name__ == "__main__":
    unittest.main()
