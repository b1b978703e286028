import os
import sys
import pytest

# Ensure msgcodec can be imported without installing
sys.path.append(os.getcwd())


@pytest.fixture
def tables():
    """Packaged reference tables."""
    from msgcodec.tables import default_tables
    return default_tables()


@pytest.fixture
def parser(tables):
    from msgcodec.script import ScriptParser
    return ScriptParser(tables)


@pytest.fixture
def script_serializer(tables):
    from msgcodec.script import ScriptSerializer
    return ScriptSerializer(tables)


@pytest.fixture
def encoder(tables):
    from msgcodec.binary import MessageEncoder
    return MessageEncoder(tables)


@pytest.fixture
def decoder(tables):
    from msgcodec.binary import MessageDecoder
    return MessageDecoder(tables)


@pytest.fixture
def document(tables):
    from msgcodec.document import DocumentSerializer
    return DocumentSerializer(tables)


@pytest.fixture
def sample_catalog(tables, parser, encoder):
    """Catalog with three messages, two of them identical."""
    from msgcodec.binary import MessageCatalog

    catalog = MessageCatalog(tables=tables)
    catalog[12345] = encoder.encode(parser.parse("Hey {VII} complex!"))
    catalog[12346] = encoder.encode(parser.parse("{:scale 22}hey{:reset}"))
    catalog[20000] = encoder.encode(parser.parse("Hey {VII} complex!"))
    return catalog


@pytest.fixture
def table_assets(tmp_path):
    """Copy of the packaged table assets that tests may edit."""
    import shutil
    from msgcodec.core.config import DEFAULT_DATA_PATH

    for folder in ("schemas", "data"):
        shutil.copytree(DEFAULT_DATA_PATH / folder, tmp_path / folder)
    return tmp_path
