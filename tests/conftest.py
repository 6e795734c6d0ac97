import json

import pytest


SAMPLE = {
    "SCAN": {
        "SITE": ["http://example.com"],
        "DOMAIN": ["example.com"],
        "IP": ["93.184.216.34"],
        "CMS": ["WordPress"],
        "WAF": {"HASWAF": 1, "HASSUCURIWAF": 0},
    },
    "VERSION": {
        "VERSION": ["2.4"],
        "BUILDDATE": ["2024-01-02"],
        "DBDATE": ["2024-03-04"],
        "COMPILEDDATE": ["2024-01-02"],
    },
    "SYSTEM": {
        "NOTICE": ["Running on: nginx", "Powered by: PHP/8.1"],
        "INFO": ["Redirects to: https://example.com/"],
    },
    "WEBAPP": {
        "WARN": ["Insecure cookie"],
        "INFO": [["CMS:", "WordPress 6.4"]],
        "VERSION": ["WordPress 6.4"],
        "NOTICE": ["Directory listing disabled"],
    },
    "RECOMMENDATIONS": [
        ["Security headers", "Missing X-Frame-Options", "https://example.com/docs"],
    ],
    "OUTDATEDSCAN": [
        ["WordPress under 6.5", "Upgrade to 6.5", "https://wordpress.org"],
    ],
    "LINKS": {
        "URL": ["http://example.com/a", "http://example.com/b"],
        "JSLOCAL": ["http://example.com/app.js"],
        "IFRAME": [],
    },
    "BLACKLIST": {
        "WARN": [],
        "INFO": [["Google Safe Browsing", "https://safebrowsing.google.com"]],
    },
    "MALWARE": {
        "WARN": [["Injected spam", "<script>\n\tvar a = 1;\r\n</script>"]],
    },
}


@pytest.fixture
def sample():
    return json.loads(json.dumps(SAMPLE))


@pytest.fixture
def sample_bytes():
    return json.dumps(SAMPLE).encode("utf-8")
