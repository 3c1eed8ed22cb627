"""Test basic imports from the package."""


def test_main_import():
    """Test that the main package imports successfully."""
    import deso_social
    assert deso_social.__version__ == "0.1.0"
    assert hasattr(deso_social, 'SocialTransactions')
    assert hasattr(deso_social, 'DesoClient')


def test_crypto_import():
    """Test crypto module imports."""
    import deso_social.crypto as crypto
    assert hasattr(crypto, 'Secp256k1PrivateKey')
    assert hasattr(crypto, 'public_key_to_compressed_bytes')


def test_signers_import():
    """Test signers module imports."""
    import deso_social.signers as signers
    assert hasattr(signers, 'Signer')
    assert hasattr(signers, 'Secp256k1Signer')


def test_tx_import():
    """Test transaction module imports."""
    import deso_social.tx as tx
    assert hasattr(tx, 'Transaction')
    assert hasattr(tx, 'SubmissionOrchestrator')
    assert hasattr(tx, 'build_plan')


def test_runtime_import():
    """Test runtime module imports."""
    import deso_social.runtime as runtime
    assert hasattr(runtime, 'DesoError')
    assert hasattr(runtime, 'FixedClock')
