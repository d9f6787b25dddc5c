"""Small hand-built EPUB archives for the conversion tests."""

import zipfile
from pathlib import Path

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
)

CSS = ".note { font-style: italic; }\nh1 { color: red; }\n/* unused */\n"

CHAPTER_ONE = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Chapter One</title>'
    '<link rel="stylesheet" type="text/css" href="../Styles/main.css"/></head>'
    '<body><h1>Chapter One</h1><p class="note">Hello <b>world</b></p>'
    '<img src="../Images/cover.png" alt="Cover"/></body></html>'
)

CHAPTER_TWO = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<html xmlns="http://www.w3.org/1999/xhtml"><head><title></title></head>'
    "<body><h1>Second Heading</h1><p>More text</p></body></html>"
)


def write_sample_epub(output_path: Path, title: str = "Sample Book") -> Path:
    """Write a two-chapter EPUB 3 with a stylesheet and one image."""
    with zipfile.ZipFile(output_path, "w") as zf:
        zf.writestr("mimetype", b"application/epub+zip", compress_type=zipfile.ZIP_STORED)
        zf.writestr(
            "META-INF/container.xml",
            (
                '<?xml version="1.0" encoding="UTF-8"?>'
                '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">'
                '<rootfiles><rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>'
                "</rootfiles></container>"
            ),
        )
        zf.writestr(
            "OEBPS/content.opf",
            (
                '<?xml version="1.0" encoding="utf-8"?>'
                '<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="BookId" version="3.0">'
                '<metadata xmlns:dc="http://purl.org/dc/elements/1.1/">'
                '<dc:identifier id="BookId">urn:uuid:1234</dc:identifier>'
                f"<dc:title>{title}</dc:title>"
                "<dc:language>en</dc:language>"
                "<dc:creator>Jane Doe</dc:creator>"
                "</metadata>"
                "<manifest>"
                '<item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>'
                '<item id="ncx" href="toc.ncx" media-type="application/x-dtbncx+xml"/>'
                '<item id="css" href="Styles/main.css" media-type="text/css"/>'
                '<item id="cover-image" href="Images/cover.png" media-type="image/png"/>'
                '<item id="c1" href="Text/ch1.xhtml" media-type="application/xhtml+xml"/>'
                '<item id="c2" href="Text/ch2.xhtml" media-type="application/xhtml+xml"/>'
                "</manifest>"
                '<spine toc="ncx"><itemref idref="c1"/><itemref idref="c2" linear="no"/></spine>'
                "</package>"
            ),
        )
        zf.writestr(
            "OEBPS/nav.xhtml",
            (
                '<?xml version="1.0" encoding="utf-8"?>'
                '<html xmlns="http://www.w3.org/1999/xhtml"><head><title>nav</title></head><body>'
                '<nav epub:type="toc" xmlns:epub="http://www.idpf.org/2007/ops"><ol>'
                '<li><a href="Text/ch1.xhtml">Chapter One</a></li>'
                '<li><a href="Text/ch2.xhtml">Chapter Two</a></li>'
                "</ol></nav></body></html>"
            ),
        )
        zf.writestr(
            "OEBPS/toc.ncx",
            (
                '<?xml version="1.0" encoding="utf-8"?>'
                '<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">'
                f"<head></head><docTitle><text>{title}</text></docTitle><navMap>"
                '<navPoint id="p1" playOrder="1"><navLabel><text>Chapter One</text></navLabel>'
                '<content src="Text/ch1.xhtml"/></navPoint>'
                '<navPoint id="p2" playOrder="2"><navLabel><text>Chapter Two</text></navLabel>'
                '<content src="Text/ch2.xhtml"/></navPoint>'
                "</navMap></ncx>"
            ),
        )
        zf.writestr("OEBPS/Styles/main.css", CSS)
        zf.writestr("OEBPS/Images/cover.png", PNG_BYTES)
        zf.writestr("OEBPS/Text/ch1.xhtml", CHAPTER_ONE)
        zf.writestr("OEBPS/Text/ch2.xhtml", CHAPTER_TWO)
    return output_path
