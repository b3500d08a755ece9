from apps.mcp_server.main import main

main()
