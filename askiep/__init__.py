"""AskIEP: IEP advocacy API, AI gateway and offline-capable client."""

__version__ = "0.1.0"
