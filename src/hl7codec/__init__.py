"""HL7 v2.x message parser and serializer."""
