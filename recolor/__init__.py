# Frame recoloring: color codec, scene graph, palette service, orchestration
