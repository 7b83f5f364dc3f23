from wazuh_console.app import main

main()
