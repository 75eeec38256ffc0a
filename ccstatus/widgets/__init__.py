"""Status line widgets and the registry of widget types."""