__all__ = ("EtagwareError", "FingerprintError", "UnsupportedAlgorithm", "StreamReadError")


class EtagwareError(Exception): ...


class FingerprintError(EtagwareError): ...


class UnsupportedAlgorithm(FingerprintError): ...


class StreamReadError(FingerprintError): ...
